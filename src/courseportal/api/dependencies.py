"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Header

from courseportal.api.exceptions import PermissionDeniedError
from courseportal.cache import CacheBackend
from courseportal.catalog import CatalogService
from courseportal.catalog_store import CatalogStore
from courseportal.enrollment import EnrollmentWorkflow

COORDINATOR_ROLE = "coordinator"

# Global CatalogStore instance (initialized on app startup)
_catalog_store: CatalogStore | None = None


def init_catalog_store(db_path: str = "courseportal.db") -> CatalogStore:
    """Initialize the global CatalogStore instance."""
    global _catalog_store  # noqa: PLW0603
    _catalog_store = CatalogStore(db_path)
    return _catalog_store


def close_catalog_store() -> None:
    """Close the global CatalogStore instance."""
    global _catalog_store  # noqa: PLW0603
    if _catalog_store is not None:
        _catalog_store.close()
        _catalog_store = None


def get_catalog_store() -> Generator[CatalogStore, None, None]:
    """Dependency that provides the CatalogStore instance."""
    if _catalog_store is None:
        raise RuntimeError("CatalogStore not initialized. Call init_catalog_store() first.")
    yield _catalog_store


# Type alias for dependency injection
CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]

# Global cache backend (initialized on app startup)
_cache_backend: CacheBackend | None = None


def init_cache_backend(backend: CacheBackend) -> None:
    """Initialize the global cache backend."""
    global _cache_backend  # noqa: PLW0603
    _cache_backend = backend


def close_cache_backend() -> None:
    """Forget the global cache backend. Its owner closes the connection."""
    global _cache_backend  # noqa: PLW0603
    _cache_backend = None


def get_cache_backend() -> Generator[CacheBackend, None, None]:
    """Dependency that provides the cache backend."""
    if _cache_backend is None:
        raise RuntimeError("Cache backend not initialized. Call init_cache_backend() first.")
    yield _cache_backend


# Type alias for dependency injection
CacheBackendDep = Annotated[CacheBackend, Depends(get_cache_backend)]

# Global CatalogService instance (initialized on app startup)
_catalog_service: CatalogService | None = None


def init_catalog_service(service: CatalogService) -> None:
    """Initialize the global CatalogService instance."""
    global _catalog_service  # noqa: PLW0603
    _catalog_service = service


def close_catalog_service() -> None:
    """Close the global CatalogService instance."""
    global _catalog_service  # noqa: PLW0603
    _catalog_service = None


def get_catalog_service() -> Generator[CatalogService, None, None]:
    """Dependency that provides the CatalogService instance."""
    if _catalog_service is None:
        raise RuntimeError("CatalogService not initialized. Call init_catalog_service() first.")
    yield _catalog_service


# Type alias for dependency injection
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]

# Global EnrollmentWorkflow instance (initialized on app startup)
_enrollment_workflow: EnrollmentWorkflow | None = None


def init_enrollment_workflow(workflow: EnrollmentWorkflow) -> None:
    """Initialize the global EnrollmentWorkflow instance."""
    global _enrollment_workflow  # noqa: PLW0603
    _enrollment_workflow = workflow


def close_enrollment_workflow() -> None:
    """Close the global EnrollmentWorkflow instance."""
    global _enrollment_workflow  # noqa: PLW0603
    _enrollment_workflow = None


def get_enrollment_workflow() -> Generator[EnrollmentWorkflow, None, None]:
    """Dependency that provides the EnrollmentWorkflow instance."""
    if _enrollment_workflow is None:
        raise RuntimeError(
            "EnrollmentWorkflow not initialized. Call init_enrollment_workflow() first."
        )
    yield _enrollment_workflow


# Type alias for dependency injection
EnrollmentWorkflowDep = Annotated[EnrollmentWorkflow, Depends(get_enrollment_workflow)]


# Caller identity, forwarded by the authenticating gateway


def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """The authenticated user's identity, or None for anonymous callers."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


CurrentUserDep = Annotated[str | None, Depends(get_current_user_id)]


def get_current_roles(
    x_user_roles: Annotated[str | None, Header()] = None,
) -> frozenset[str]:
    """Roles of the caller, from a comma separated header."""
    if not x_user_roles:
        return frozenset()
    return frozenset(r.strip().lower() for r in x_user_roles.split(",") if r.strip())


CurrentRolesDep = Annotated[frozenset[str], Depends(get_current_roles)]


def require_coordinator(user_id: CurrentUserDep, roles: CurrentRolesDep) -> str:
    """Dependency that admits only signed-in course coordinators."""
    if user_id is None or COORDINATOR_ROLE not in roles:
        raise PermissionDeniedError("Only course coordinators can manage courses.")
    return user_id


CoordinatorDep = Annotated[str, Depends(require_coordinator)]
