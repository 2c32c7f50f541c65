"""Fixtures for API route tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from courseportal.api.app import register_exception_handlers
from courseportal.api.dependencies import (
    get_cache_backend,
    get_catalog_service,
    get_catalog_store,
    get_enrollment_workflow,
)
from courseportal.api.routes import catalog, courses, enrollments, health
from courseportal.catalog import CatalogCache, CatalogService, RecentCourseTracker
from courseportal.catalog_store import CatalogStore
from courseportal.enrollment import EnrollmentWorkflow


@pytest.fixture
def app(seeded_store: CatalogStore, fake_cache) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    app = FastAPI()
    service = CatalogService(
        seeded_store,
        CatalogCache(seeded_store, fake_cache),
        RecentCourseTracker(fake_cache),
    )
    workflow = EnrollmentWorkflow(seeded_store)

    def override_get_catalog_store():
        yield seeded_store

    def override_get_cache_backend():
        yield fake_cache

    def override_get_catalog_service():
        yield service

    def override_get_enrollment_workflow():
        yield workflow

    app.dependency_overrides[get_catalog_store] = override_get_catalog_store
    app.dependency_overrides[get_cache_backend] = override_get_cache_backend
    app.dependency_overrides[get_catalog_service] = override_get_catalog_service
    app.dependency_overrides[get_enrollment_workflow] = override_get_enrollment_workflow

    register_exception_handlers(app)

    # Include routes
    for module in (catalog, courses, enrollments, health):
        app.include_router(module.router, prefix="/api/v1")

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
