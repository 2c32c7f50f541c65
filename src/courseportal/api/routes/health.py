"""Health check endpoint."""

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from courseportal.api.dependencies import CacheBackendDep, CatalogStoreDep
from courseportal.api.models import APIResponse, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=APIResponse[HealthResponse])
def health(store: CatalogStoreDep, backend: CacheBackendDep) -> APIResponse[HealthResponse]:
    """Report database and cache reachability. The cache is optional."""
    try:
        store.count_courses()
        database_ok = True
    except SQLAlchemyError:
        database_ok = False

    cache_ok = backend.ping()
    return APIResponse(
        data=HealthResponse(
            status="ok" if database_ok else "degraded",
            database=database_ok,
            cache=cache_ok,
        )
    )
