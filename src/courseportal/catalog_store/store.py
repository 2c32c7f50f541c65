"""CatalogStore - Main API for Catalog Store operations."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import selectinload

from courseportal.catalog_store.database import Database
from courseportal.catalog_store.exceptions import (
    CourseCapacityExceededError,
    CourseExistsError,
    CourseNotFoundError,
    EnrollmentNotFoundError,
    EnrollmentPersistenceError,
)
from courseportal.catalog_store.models import (
    Course,
    Enrollment,
    EnrollmentState,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import time

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time in UTC, stored without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)


class EnrollmentTransaction:
    """Unit of work for creating one enrollment.

    Yielded by CatalogStore.enrollment_transaction(). Holds the target course
    (with its enrollments loaded) and the acting user, and writes at most one
    enrollment inside the surrounding transaction.
    """

    def __init__(self, session: Session, course: Course | None, user_id: str) -> None:
        self._session = session
        self.course = course
        self.user_id = user_id
        self.created: Enrollment | None = None

    def has_active_enrollment(self) -> bool:
        """Whether the user already holds a non-cancelled enrollment in the course."""
        if self.course is None:
            return False
        return any(e.user_id == self.user_id and e.is_active for e in self.course.enrollments)

    def other_active_enrollments(self) -> list[Enrollment]:
        """The user's non-cancelled enrollments in other courses, courses loaded."""
        stmt = (
            select(Enrollment)
            .options(selectinload(Enrollment.course))
            .where(
                Enrollment.user_id == self.user_id,
                Enrollment.state != EnrollmentState.CANCELLED.value,
            )
            .order_by(Enrollment.id)
        )
        if self.course is not None:
            stmt = stmt.where(Enrollment.course_id != self.course.id)
        return list(self._session.execute(stmt).scalars().all())

    def add_enrollment(self, registered_at: datetime | None = None) -> Enrollment:
        """Insert a pending enrollment and re-check capacity under the write lock.

        Args:
            registered_at: Registration timestamp. Defaults to now (UTC).

        Returns:
            The new Enrollment (committed when the transaction block exits).

        Raises:
            CourseCapacityExceededError: If the insert pushed the course over capacity.
        """
        if self.course is None:
            raise CourseNotFoundError("Cannot enroll in a course that does not exist")
        if self.created is not None:
            raise EnrollmentPersistenceError("Transaction already created an enrollment")

        enrollment = Enrollment(
            course_id=self.course.id,
            user_id=self.user_id,
            registered_at=registered_at if registered_at is not None else utcnow(),
            state=EnrollmentState.PENDING.value,
        )
        self._session.add(enrollment)
        self._session.flush()

        # The INSERT took the database write lock; count what is really there now
        count_stmt = select(func.count(Enrollment.id)).where(
            Enrollment.course_id == self.course.id,
            Enrollment.state != EnrollmentState.CANCELLED.value,
        )
        active_count = self._session.execute(count_stmt).scalar_one()
        if active_count > self.course.capacity:
            raise CourseCapacityExceededError(
                f"Course '{self.course.code}' would hold {active_count} "
                f"enrollments over a capacity of {self.course.capacity}"
            )

        enrollment.course = self.course
        self.created = enrollment
        return enrollment


class CatalogStore:
    """Main API for Catalog Store operations.

    Provides reads and writes for Courses and Enrollments.
    """

    def __init__(self, db_path: str = "courseportal.db") -> None:
        """Initialize Catalog Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_schema()
        self._enrollment_lock = threading.Lock()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Course Operations ---

    def create_course(
        self,
        code: str,
        name: str,
        credits: int,
        capacity: int,
        start_time: time,
        end_time: time,
        active: bool = True,
    ) -> Course:
        """Create a new course.

        Args:
            code: Short unique course code (e.g. "BD101")
            name: Display name
            credits: Credit count
            capacity: Maximum number of seat-holding enrollments
            start_time: Daily start time
            end_time: Daily end time
            active: Whether the course is listed in the catalog

        Returns:
            Created Course object with generated ID

        Raises:
            CourseExistsError: If a course with the same code already exists
        """
        session = self._db.get_session()
        try:
            course = Course(
                code=code,
                name=name,
                credits=credits,
                capacity=capacity,
                start_time=start_time,
                end_time=end_time,
                active=active,
            )
            session.add(course)
            session.commit()
            session.refresh(course)
            logger.info("Created course %s (id=%s)", course.code, course.id)
            return course
        except IntegrityError as e:
            session.rollback()
            if "UNIQUE constraint failed" in str(e) or "courses.code" in str(e):
                raise CourseExistsError(f"Course with code '{code}' already exists") from e
            raise
        finally:
            session.close()

    def get_course(self, course_id: int, with_enrollments: bool = False) -> Course:
        """Get course by ID.

        Args:
            course_id: The course's ID
            with_enrollments: Eagerly load the course's enrollments

        Returns:
            The Course object

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            stmt = select(Course).where(Course.id == course_id)
            if with_enrollments:
                stmt = stmt.options(selectinload(Course.enrollments))
            course = session.execute(stmt).scalar_one_or_none()
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
            return course
        finally:
            session.close()

    def list_courses(
        self,
        active_only: bool = True,
        condition: ColumnElement[bool] | None = None,
    ) -> list[Course]:
        """List courses, optionally restricted by a SQL predicate.

        Args:
            active_only: Only return courses with active = true
            condition: Extra predicate over Course columns (optional)

        Returns:
            List of courses, ordered by ID
        """
        session = self._db.get_session()
        try:
            stmt = select(Course)
            if active_only:
                stmt = stmt.where(Course.active.is_(True))
            if condition is not None:
                stmt = stmt.where(condition)
            stmt = stmt.order_by(Course.id)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def count_courses(self) -> int:
        """Count all courses, active or not."""
        session = self._db.get_session()
        try:
            return session.execute(select(func.count(Course.id))).scalar_one()
        finally:
            session.close()

    def update_course(
        self,
        course_id: int,
        name: str | None = None,
        credits: int | None = None,
        capacity: int | None = None,
        start_time: time | None = None,
        end_time: time | None = None,
        active: bool | None = None,
    ) -> Course:
        """Update course fields. Only provided fields are updated.

        Args:
            course_id: The course's ID
            name: New display name (optional)
            credits: New credit count (optional)
            capacity: New capacity (optional)
            start_time: New start time (optional)
            end_time: New end time (optional)
            active: New active flag; False deactivates the course (optional)

        Returns:
            The updated Course object

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_id)
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")

            if name is not None:
                course.name = name
            if credits is not None:
                course.credits = credits
            if capacity is not None:
                course.capacity = capacity
            if start_time is not None:
                course.start_time = start_time
            if end_time is not None:
                course.end_time = end_time
            if active is not None:
                course.active = active

            session.commit()
            session.refresh(course)
            logger.info("Updated course %s (id=%s)", course.code, course.id)
            return course
        finally:
            session.close()

    # --- Enrollment Operations ---

    @contextmanager
    def enrollment_transaction(self, course_id: int, user_id: str) -> Iterator[EnrollmentTransaction]:
        """Open the transactional boundary for one enrollment attempt.

        Attempts are serialized within this process. The block's reads and its
        single write share one session; the block commits only if it created an
        enrollment, and rolls back on any exception.

        Args:
            course_id: The target course's ID
            user_id: Identity of the enrolling account

        Yields:
            EnrollmentTransaction with the course (or None) and its enrollments

        Raises:
            EnrollmentPersistenceError: If the write conflicts at the database level
        """
        with self._enrollment_lock:
            session = self._db.get_session()
            try:
                stmt = (
                    select(Course)
                    .options(selectinload(Course.enrollments))
                    .where(Course.id == course_id)
                )
                course = session.execute(stmt).scalar_one_or_none()
                tx = EnrollmentTransaction(session, course, user_id)

                yield tx

                if tx.created is not None:
                    session.commit()
                else:
                    # Detach first so rollback does not expire what the caller read.
                    session.expunge_all()
                    session.rollback()
            except (IntegrityError, OperationalError) as e:
                session.rollback()
                logger.warning(
                    "Enrollment write failed for course %s, user %s: %s", course_id, user_id, e
                )
                raise EnrollmentPersistenceError(
                    f"Could not save enrollment for course '{course_id}'"
                ) from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def create_enrollment(
        self,
        course_id: int,
        user_id: str,
        state: EnrollmentState = EnrollmentState.PENDING,
        registered_at: datetime | None = None,
    ) -> Enrollment:
        """Insert an enrollment without running any business rule.

        Used by data loading and by the external approval process.

        Args:
            course_id: The course's ID
            user_id: Identity of the enrolled account
            state: Initial state
            registered_at: Registration timestamp. Defaults to now (UTC).

        Returns:
            Created Enrollment object

        Raises:
            CourseNotFoundError: If course doesn't exist
            EnrollmentPersistenceError: If the (course, user) pair already holds a seat
        """
        session = self._db.get_session()
        try:
            if session.get(Course, course_id) is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")

            enrollment = Enrollment(
                course_id=course_id,
                user_id=user_id,
                registered_at=registered_at if registered_at is not None else utcnow(),
                state=state.value,
            )
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            return enrollment
        except IntegrityError as e:
            session.rollback()
            raise EnrollmentPersistenceError(
                f"User '{user_id}' already holds an enrollment in course '{course_id}'"
            ) from e
        finally:
            session.close()

    def get_enrollment(self, enrollment_id: int) -> Enrollment:
        """Get enrollment by ID, with its course loaded.

        Raises:
            EnrollmentNotFoundError: If enrollment doesn't exist
        """
        session = self._db.get_session()
        try:
            stmt = (
                select(Enrollment)
                .options(selectinload(Enrollment.course))
                .where(Enrollment.id == enrollment_id)
            )
            enrollment = session.execute(stmt).scalar_one_or_none()
            if enrollment is None:
                raise EnrollmentNotFoundError(f"Enrollment with id '{enrollment_id}' not found")
            return enrollment
        finally:
            session.close()

    def list_user_enrollments(self, user_id: str) -> list[Enrollment]:
        """List a user's enrollments in every state, courses loaded.

        Args:
            user_id: Identity of the enrolled account

        Returns:
            List of enrollments, ordered by registered_at descending (most recent first)
        """
        session = self._db.get_session()
        try:
            stmt = (
                select(Enrollment)
                .options(selectinload(Enrollment.course))
                .where(Enrollment.user_id == user_id)
                .order_by(Enrollment.registered_at.desc(), Enrollment.id.desc())
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def set_enrollment_state(self, enrollment_id: int, state: EnrollmentState) -> Enrollment:
        """Move an enrollment to a new state (approval or cancellation).

        Raises:
            EnrollmentNotFoundError: If enrollment doesn't exist
            EnrollmentPersistenceError: If reactivating collides with another active seat
        """
        session = self._db.get_session()
        try:
            enrollment = session.get(Enrollment, enrollment_id)
            if enrollment is None:
                raise EnrollmentNotFoundError(f"Enrollment with id '{enrollment_id}' not found")

            enrollment.enrollment_state = state
            session.commit()
            session.refresh(enrollment)
            logger.info("Enrollment %s moved to %s", enrollment_id, state.value)
            return enrollment
        except IntegrityError as e:
            session.rollback()
            raise EnrollmentPersistenceError(
                f"Enrollment '{enrollment_id}' cannot move to {state.value}"
            ) from e
        finally:
            session.close()
