"""EnrollmentWorkflow - validates and records one enrollment."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from courseportal.catalog_store import (
    CourseCapacityExceededError,
    EnrollmentPersistenceError,
)
from courseportal.enrollment.exceptions import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    EnrollmentRetryError,
    NoCapacityError,
    NotAuthenticatedError,
    ScheduleConflictError,
)
from courseportal.enrollment.schedule import courses_overlap, format_window

if TYPE_CHECKING:
    from courseportal.catalog_store import CatalogStore, Enrollment

logger = logging.getLogger(__name__)

SIGN_IN_MESSAGE = "You must sign in to enroll in a course."
UNAVAILABLE_MESSAGE = "The course does not exist or is not available."
ALREADY_ENROLLED_MESSAGE = "You are already enrolled in this course."
NO_CAPACITY_MESSAGE = "There are no seats left in this course."
RETRY_MESSAGE = "Your enrollment could not be saved. Please try again."


def success_message(enrollment: Enrollment) -> str:
    """User-facing confirmation for a created enrollment."""
    return f"You have enrolled in '{enrollment.course.name}'. Your enrollment is pending."


class EnrollmentWorkflow:
    """Runs the enrollment gates in order and records the enrollment.

    Gates, first failure wins:
        0. the caller is identified
        1. the course exists and is active
        2. no seat-holding enrollment for (course, user) exists
        3. the course has free seats
        4. no other seat-holding enrollment of the user overlaps the course
        5. the pending enrollment is written

    Gates 2 to 5 run inside a single store transaction, so exactly one row is
    written on success and none on rejection.
    """

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def enroll(self, course_id: int, user_id: str | None) -> Enrollment:
        """Enroll a user in a course.

        Args:
            course_id: The target course's ID
            user_id: Identity of the enrolling account, None when anonymous

        Returns:
            The created pending Enrollment, with its course loaded

        Raises:
            EnrollmentRejectedError: A subclass naming the gate that failed
        """
        if not user_id:
            raise NotAuthenticatedError(SIGN_IN_MESSAGE)

        try:
            with self.store.enrollment_transaction(course_id, user_id) as tx:
                course = tx.course
                if course is None or not course.active:
                    raise CourseUnavailableError(UNAVAILABLE_MESSAGE)

                if tx.has_active_enrollment():
                    raise AlreadyEnrolledError(ALREADY_ENROLLED_MESSAGE)

                if course.active_enrollment_count() >= course.capacity:
                    raise NoCapacityError(NO_CAPACITY_MESSAGE)

                for existing in tx.other_active_enrollments():
                    if courses_overlap(existing.course, course):
                        raise ScheduleConflictError(
                            f"This course's schedule overlaps with "
                            f"'{existing.course.name}' ({format_window(existing.course)})."
                        )

                enrollment = tx.add_enrollment()
        except CourseCapacityExceededError as e:
            logger.warning("Capacity race lost for course %s: %s", course_id, e)
            raise NoCapacityError(NO_CAPACITY_MESSAGE) from e
        except EnrollmentPersistenceError as e:
            raise EnrollmentRetryError(RETRY_MESSAGE) from e
        except (
            CourseUnavailableError,
            AlreadyEnrolledError,
            NoCapacityError,
            ScheduleConflictError,
        ) as e:
            logger.info(
                "Enrollment rejected for user %s in course %s: %s", user_id, course_id, e.reason
            )
            raise

        logger.info(
            "User %s enrolled in course %s (enrollment %s)", user_id, course_id, enrollment.id
        )
        return enrollment

    def list_enrollments(self, user_id: str | None) -> list[Enrollment]:
        """List the user's enrollments, most recent first.

        Raises:
            NotAuthenticatedError: If no user identity is given
        """
        if not user_id:
            raise NotAuthenticatedError("You must sign in to see your enrollments.")
        return self.store.list_user_enrollments(user_id)
