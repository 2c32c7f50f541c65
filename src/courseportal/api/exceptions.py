"""Exceptions raised by the API layer itself."""


class PermissionDeniedError(Exception):
    """The caller lacks the role required by the endpoint."""
