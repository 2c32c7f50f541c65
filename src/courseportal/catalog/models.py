"""Data models for the catalog module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from courseportal.catalog_store import Course


@dataclass
class CatalogResult:
    """Outcome of a catalog listing or search.

    Attributes:
        courses: Matching courses, ordered by ID.
        show_initial_prompt: No filter was given; the caller should prompt for
            one instead of reporting "no matches".
        from_cache: The list was served from the catalog cache.
    """

    courses: list[Course] = field(default_factory=list)
    show_initial_prompt: bool = False
    from_cache: bool = False


@dataclass
class CourseDetail:
    """A course with its computed free seats."""

    course: Course
    available_slots: int


@dataclass
class RecentCourse:
    """The last course a user looked at."""

    course_id: int
    course_name: str
    visited_at: datetime
