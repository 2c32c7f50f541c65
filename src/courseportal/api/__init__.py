"""REST API - FastAPI application for the course portal."""

from courseportal.api.app import create_app, register_exception_handlers

__all__ = ["create_app", "register_exception_handlers"]
