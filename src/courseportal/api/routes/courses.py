"""Course detail and administration endpoints."""

from fastapi import APIRouter, status

from courseportal.api.dependencies import CatalogServiceDep, CoordinatorDep, CurrentUserDep
from courseportal.api.models import (
    APIResponse,
    CourseCreate,
    CourseDetailResponse,
    CourseResponse,
    CourseUpdate,
    RecentCourseResponse,
    course_detail_to_response,
    course_to_response,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/last-visited", response_model=APIResponse[RecentCourseResponse])
def get_last_visited(
    service: CatalogServiceDep, user_id: CurrentUserDep
) -> APIResponse[RecentCourseResponse]:
    """Get the caller's last visited course. Data is null when there is none."""
    if user_id is None:
        return APIResponse(data=None)
    recent = service.last_visited(user_id)
    if recent is None:
        return APIResponse(data=None)
    return APIResponse(data=RecentCourseResponse.model_validate(recent))


@router.get("/{course_id}", response_model=APIResponse[CourseDetailResponse])
def get_course(
    course_id: int, service: CatalogServiceDep, user_id: CurrentUserDep
) -> APIResponse[CourseDetailResponse]:
    """Get a course with its available slots."""
    detail = service.course_detail(course_id, user_id=user_id)
    return APIResponse(data=course_detail_to_response(detail))


@router.post(
    "",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(
    course: CourseCreate, service: CatalogServiceDep, _coordinator: CoordinatorDep
) -> APIResponse[CourseResponse]:
    """Create a new course."""
    created = service.create_course(
        code=course.code,
        name=course.name,
        credits=course.credits,
        capacity=course.capacity,
        start_time=course.start_time,
        end_time=course.end_time,
        active=course.active,
    )
    return APIResponse(data=course_to_response(created))


@router.patch("/{course_id}", response_model=APIResponse[CourseResponse])
def update_course(
    course_id: int,
    course: CourseUpdate,
    service: CatalogServiceDep,
    _coordinator: CoordinatorDep,
) -> APIResponse[CourseResponse]:
    """Update or deactivate a course (partial update)."""
    updated = service.update_course(
        course_id,
        name=course.name,
        credits=course.credits,
        capacity=course.capacity,
        start_time=course.start_time,
        end_time=course.end_time,
        active=course.active,
    )
    return APIResponse(data=course_to_response(updated))
