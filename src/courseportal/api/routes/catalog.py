"""Catalog listing and search endpoints."""

from fastapi import APIRouter

from courseportal.api.dependencies import CatalogServiceDep
from courseportal.api.models import APIResponse, CatalogResponse, catalog_to_response

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=APIResponse[CatalogResponse])
def search_catalog(
    service: CatalogServiceDep,
    name: str | None = None,
    credits_min: int | None = None,
    credits_max: int | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
) -> APIResponse[CatalogResponse]:
    """Search active courses.

    With no filter at all the result is empty and flagged show_initial_prompt.
    """
    result = service.search(
        name=name,
        credits_min=credits_min,
        credits_max=credits_max,
        start_time=start_time,
        end_time=end_time,
    )
    return APIResponse(data=catalog_to_response(result))


@router.get("/active", response_model=APIResponse[CatalogResponse])
def list_active_courses(service: CatalogServiceDep) -> APIResponse[CatalogResponse]:
    """List every active course (cached)."""
    return APIResponse(data=catalog_to_response(service.active_courses()))
