"""Enrollment - the validation pipeline that creates enrollments."""

from courseportal.enrollment.exceptions import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    EnrollmentRejectedError,
    EnrollmentRetryError,
    NoCapacityError,
    NotAuthenticatedError,
    ScheduleConflictError,
)
from courseportal.enrollment.schedule import courses_overlap, format_window, intervals_overlap
from courseportal.enrollment.workflow import EnrollmentWorkflow, success_message

__all__ = [
    "AlreadyEnrolledError",
    "CourseUnavailableError",
    "EnrollmentRejectedError",
    "EnrollmentRetryError",
    "EnrollmentWorkflow",
    "NoCapacityError",
    "NotAuthenticatedError",
    "ScheduleConflictError",
    "courses_overlap",
    "format_window",
    "intervals_overlap",
    "success_message",
]
