"""Pydantic models for REST API."""

from datetime import datetime, time
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper.

    ``code`` carries a stable machine-readable reason on failures.
    """

    data: T | None = None
    error: str | None = None
    code: str | None = None


# Course models


class CourseResponse(BaseModel):
    """Response model for a course."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    credits: int
    capacity: int
    start_time: time
    end_time: time
    active: bool


class CourseDetailResponse(CourseResponse):
    """Response model for a course with its free seats."""

    available_slots: int


class CatalogResponse(BaseModel):
    """Response model for catalog listings and searches."""

    courses: list[CourseResponse]
    show_initial_prompt: bool = False
    from_cache: bool = False


class CourseCreate(BaseModel):
    """Request model for creating a course."""

    code: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1, max_length=200)
    credits: int = Field(..., ge=1)
    capacity: int = Field(..., ge=1)
    start_time: time
    end_time: time
    active: bool = True

    @model_validator(mode="after")
    def check_window(self) -> "CourseCreate":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self


class CourseUpdate(BaseModel):
    """Request model for updating a course (partial update)."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    credits: int | None = Field(default=None, ge=1)
    capacity: int | None = Field(default=None, ge=1)
    start_time: time | None = None
    end_time: time | None = None
    active: bool | None = None

    @model_validator(mode="after")
    def check_window(self) -> "CourseUpdate":
        if (
            self.start_time is not None
            and self.end_time is not None
            and self.start_time >= self.end_time
        ):
            raise ValueError("start_time must be earlier than end_time")
        return self


class RecentCourseResponse(BaseModel):
    """Response model for the caller's last visited course."""

    model_config = ConfigDict(from_attributes=True)

    course_id: int
    course_name: str
    visited_at: datetime


def course_to_response(course: Any) -> CourseResponse:
    """Convert a Course model to CourseResponse."""
    return CourseResponse.model_validate(course)


def course_detail_to_response(detail: Any) -> CourseDetailResponse:
    """Convert a CourseDetail to CourseDetailResponse."""
    data = CourseResponse.model_validate(detail.course).model_dump()
    return CourseDetailResponse(**data, available_slots=detail.available_slots)


def catalog_to_response(result: Any) -> CatalogResponse:
    """Convert a CatalogResult to CatalogResponse."""
    return CatalogResponse(
        courses=[course_to_response(c) for c in result.courses],
        show_initial_prompt=result.show_initial_prompt,
        from_cache=result.from_cache,
    )


# Enrollment models


class EnrollmentCreate(BaseModel):
    """Request model for enrolling in a course."""

    course_id: int


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    user_id: str
    registered_at: datetime
    state: str
    course: CourseResponse


class EnrollmentCreatedResponse(EnrollmentResponse):
    """Response model for a new enrollment, with the confirmation message."""

    message: str


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment model to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)


# Health


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    database: bool
    cache: bool
