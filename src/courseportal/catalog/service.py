"""CatalogService - course listing, search and detail."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from courseportal.catalog.exceptions import CourseWindowError
from courseportal.catalog.filters import validate_filters
from courseportal.catalog.models import CatalogResult, CourseDetail
from courseportal.catalog.query import CourseQuery

if TYPE_CHECKING:
    from datetime import time

    from courseportal.catalog.cache import CatalogCache
    from courseportal.catalog.models import RecentCourse
    from courseportal.catalog.tracker import RecentCourseTracker
    from courseportal.catalog_store import CatalogStore, Course

logger = logging.getLogger(__name__)


class CatalogService:
    """Entry point for catalog requests.

    - Searches go through filter validation and the query engine, never the cache
    - The unfiltered active-course listing is served by the catalog cache
    - Course mutations invalidate the catalog cache
    """

    def __init__(
        self,
        store: CatalogStore,
        cache: CatalogCache,
        tracker: RecentCourseTracker | None = None,
    ) -> None:
        """Initialize the CatalogService.

        Args:
            store: CatalogStore for course reads and writes.
            cache: CatalogCache over the active-course list.
            tracker: Optional RecentCourseTracker for last-visited bookkeeping.
        """
        self.store = store
        self.cache = cache
        self.tracker = tracker

    def search(
        self,
        name: str | None = None,
        credits_min: int | None = None,
        credits_max: int | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
    ) -> CatalogResult:
        """Search active courses.

        Returns:
            CatalogResult with the matches, or an empty result flagged
            show_initial_prompt when no filter was supplied.

        Raises:
            FilterValidationError: If the filters are invalid.
        """
        validate_filters(credits_min, credits_max, start_time, end_time)

        query = CourseQuery(
            name=name,
            credits_min=credits_min,
            credits_max=credits_max,
            start_time=start_time,
            end_time=end_time,
        )
        if query.is_empty():
            return CatalogResult(courses=[], show_initial_prompt=True)

        courses = query.run(self.store)
        logger.debug("Catalog search %s matched %d courses", query, len(courses))
        return CatalogResult(courses=courses)

    def active_courses(self) -> CatalogResult:
        """List every active course through the catalog cache."""
        courses, from_cache = self.cache.load_active_courses()
        return CatalogResult(courses=courses, from_cache=from_cache)

    def course_detail(self, course_id: int, user_id: str | None = None) -> CourseDetail:
        """Get a course with its available slots.

        When ``user_id`` is given, the course is recorded as the user's last
        visited course.

        Raises:
            CourseNotFoundError: If the course doesn't exist.
        """
        course = self.store.get_course(course_id, with_enrollments=True)

        if user_id and self.tracker is not None:
            self.tracker.record_visit(user_id, course)

        return CourseDetail(course=course, available_slots=course.available_slots)

    def last_visited(self, user_id: str) -> RecentCourse | None:
        """Return the user's last visited course, if any."""
        if self.tracker is None:
            return None
        return self.tracker.last_visited(user_id)

    # --- Course administration ---

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
        """Create a course and invalidate the catalog cache."""
        course = self.store.create_course(
            code=code,
            name=name,
            credits=credits,
            capacity=capacity,
            start_time=start_time,
            end_time=end_time,
            active=active,
        )
        self.cache.invalidate()
        return course

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
        """Update or deactivate a course and invalidate the catalog cache.

        A partial time change is checked against the stored window, so
        sending only ``end_time`` cannot leave the course ending before
        it starts.

        Raises:
            CourseNotFoundError: If the course doesn't exist.
            CourseWindowError: If the resulting window is empty or inverted.
        """
        if start_time is not None or end_time is not None:
            current = self.store.get_course(course_id)
            new_start = start_time if start_time is not None else current.start_time
            new_end = end_time if end_time is not None else current.end_time
            if new_start >= new_end:
                raise CourseWindowError(
                    f"Course must end after it starts "
                    f"(start {new_start:%H:%M}, end {new_end:%H:%M})"
                )

        course = self.store.update_course(
            course_id,
            name=name,
            credits=credits,
            capacity=capacity,
            start_time=start_time,
            end_time=end_time,
            active=active,
        )
        self.cache.invalidate()
        return course
