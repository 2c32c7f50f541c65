"""Enrollment endpoints."""

from fastapi import APIRouter, status

from courseportal.api.dependencies import CurrentUserDep, EnrollmentWorkflowDep
from courseportal.api.models import (
    APIResponse,
    EnrollmentCreate,
    EnrollmentCreatedResponse,
    EnrollmentResponse,
    enrollment_to_response,
)
from courseportal.enrollment import success_message

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.post(
    "",
    response_model=APIResponse[EnrollmentCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    request: EnrollmentCreate, workflow: EnrollmentWorkflowDep, user_id: CurrentUserDep
) -> APIResponse[EnrollmentCreatedResponse]:
    """Enroll the caller in a course. Rejections are mapped by the app."""
    enrollment = workflow.enroll(request.course_id, user_id)
    data = enrollment_to_response(enrollment).model_dump()
    return APIResponse(data=EnrollmentCreatedResponse(**data, message=success_message(enrollment)))


@router.get("/mine", response_model=APIResponse[list[EnrollmentResponse]])
def list_my_enrollments(
    workflow: EnrollmentWorkflowDep, user_id: CurrentUserDep
) -> APIResponse[list[EnrollmentResponse]]:
    """List the caller's enrollments, most recent first."""
    enrollments = workflow.list_enrollments(user_id)
    return APIResponse(data=[enrollment_to_response(e) for e in enrollments])
