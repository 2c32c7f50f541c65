"""Exceptions for the Enrollment module.

Every rejection carries a stable ``reason`` code and a user-facing message.
Only EnrollmentRetryError is retryable; the other rejections are final until
the caller changes the request or the catalog state changes.
"""


class EnrollmentRejectedError(Exception):
    """Base exception for a rejected enrollment attempt."""

    reason = "rejected"
    retryable = False


class NotAuthenticatedError(EnrollmentRejectedError):
    """No user identity was supplied."""

    reason = "not_authenticated"


class CourseUnavailableError(EnrollmentRejectedError):
    """The course does not exist or is not active."""

    reason = "course_unavailable"


class AlreadyEnrolledError(EnrollmentRejectedError):
    """The user already holds a non-cancelled enrollment in the course."""

    reason = "already_enrolled"


class NoCapacityError(EnrollmentRejectedError):
    """The course has no free seats."""

    reason = "no_capacity"


class ScheduleConflictError(EnrollmentRejectedError):
    """The course overlaps another course the user is enrolled in."""

    reason = "schedule_conflict"


class EnrollmentRetryError(EnrollmentRejectedError):
    """The enrollment could not be saved; trying again may succeed."""

    reason = "retry"
    retryable = True
