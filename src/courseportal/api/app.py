"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from courseportal import __version__
from courseportal.api.dependencies import (
    close_cache_backend,
    close_catalog_service,
    close_catalog_store,
    close_enrollment_workflow,
    init_cache_backend,
    init_catalog_service,
    init_catalog_store,
    init_enrollment_workflow,
)
from courseportal.api.exceptions import PermissionDeniedError
from courseportal.api.models import APIResponse
from courseportal.api.routes import catalog, courses, enrollments, health
from courseportal.cache import RedisCacheBackend
from courseportal.catalog import (
    ACTIVE_COURSES_KEY,
    CatalogCache,
    CatalogService,
    CourseWindowError,
    FilterValidationError,
    RecentCourseTracker,
)
from courseportal.catalog_store import (
    CatalogStoreError,
    CourseExistsError,
    CourseNotFoundError,
    EnrollmentNotFoundError,
    seed_demo_courses,
)
from courseportal.config import Settings
from courseportal.enrollment import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    EnrollmentRejectedError,
    EnrollmentRetryError,
    EnrollmentWorkflow,
    NoCapacityError,
    NotAuthenticatedError,
    ScheduleConflictError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from courseportal.cache import CacheBackend

logger = logging.getLogger(__name__)

REJECTION_STATUS: dict[type[EnrollmentRejectedError], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    CourseUnavailableError: status.HTTP_404_NOT_FOUND,
    AlreadyEnrolledError: status.HTTP_409_CONFLICT,
    NoCapacityError: status.HTTP_409_CONFLICT,
    ScheduleConflictError: status.HTTP_409_CONFLICT,
    EnrollmentRetryError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_response(status_code: int, error: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=error, code=code).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings | None = app.state.settings
    if settings is None:
        settings = Settings.from_env()
        app.state.settings = settings

    # Startup
    store = init_catalog_store(settings.db_path)
    if settings.seed_demo:
        seed_demo_courses(store)

    backend: CacheBackend | None = app.state.cache_backend
    owned_backend: RedisCacheBackend | None = None
    if backend is None:
        owned_backend = RedisCacheBackend.from_url(settings.redis_url, prefix=settings.cache_prefix)
        backend = owned_backend
    init_cache_backend(backend)

    catalog_cache = CatalogCache(
        store, backend, ttl_seconds=settings.catalog_ttl, key=ACTIVE_COURSES_KEY
    )
    tracker = RecentCourseTracker(backend, ttl_seconds=settings.recent_course_ttl)
    init_catalog_service(CatalogService(store, catalog_cache, tracker))
    init_enrollment_workflow(EnrollmentWorkflow(store))
    logger.info("Course Portal API started (db=%s)", settings.db_path)

    yield
    # Shutdown
    close_enrollment_workflow()
    close_catalog_service()
    close_cache_backend()
    if owned_backend is not None:
        owned_backend.close()
    close_catalog_store()
    logger.info("Course Portal API stopped")


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to JSON error responses."""

    @app.exception_handler(FilterValidationError)
    async def filter_validation_handler(
        _request: Request, exc: FilterValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), "invalid_filter")

    @app.exception_handler(CourseWindowError)
    async def course_window_handler(_request: Request, exc: CourseWindowError) -> JSONResponse:
        return _error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), "invalid_course_window"
        )

    @app.exception_handler(EnrollmentRejectedError)
    async def enrollment_rejected_handler(
        _request: Request, exc: EnrollmentRejectedError
    ) -> JSONResponse:
        status_code = REJECTION_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return _error_response(status_code, str(exc), exc.reason)

    @app.exception_handler(CourseNotFoundError)
    async def course_not_found_handler(
        _request: Request, _exc: CourseNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, "Course not found", "course_not_found")

    @app.exception_handler(EnrollmentNotFoundError)
    async def enrollment_not_found_handler(
        _request: Request, _exc: EnrollmentNotFoundError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_404_NOT_FOUND, "Enrollment not found", "enrollment_not_found"
        )

    @app.exception_handler(CourseExistsError)
    async def course_exists_handler(_request: Request, _exc: CourseExistsError) -> JSONResponse:
        return _error_response(
            status.HTTP_409_CONFLICT, "Course with this code already exists", "course_exists"
        )

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(
        _request: Request, exc: PermissionDeniedError
    ) -> JSONResponse:
        return _error_response(status.HTTP_403_FORBIDDEN, str(exc), "forbidden")

    @app.exception_handler(CatalogStoreError)
    async def catalog_store_error_handler(
        _request: Request, exc: CatalogStoreError
    ) -> JSONResponse:
        logger.error("Unhandled store error: %s", exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal_error"
        )


def create_app(
    settings: Settings | None = None,
    cache_backend: CacheBackend | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings. When omitted they are read from the
            environment at startup, so a bad variable fails the lifespan
            rather than the import.
        cache_backend: Cache backend to use instead of connecting to
            settings.redis_url. The caller keeps ownership of it.
    """
    app = FastAPI(
        title="Course Portal API",
        description="REST API for the course catalog and enrollments",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.cache_backend = cache_backend

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(catalog.router, prefix="/api/v1")
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
