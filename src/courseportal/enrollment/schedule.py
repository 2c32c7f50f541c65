"""Schedule overlap checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import time

    from courseportal.catalog_store import Course


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Whether two half-open ``[start, end)`` windows intersect.

    Back-to-back windows (one ends exactly when the other starts) do not overlap.
    """
    return start_a < end_b and end_a > start_b


def courses_overlap(existing: Course, target: Course) -> bool:
    """Whether two courses' daily time windows intersect."""
    return intervals_overlap(existing.start_time, existing.end_time, target.start_time, target.end_time)


def format_window(course: Course) -> str:
    """Render a course window as ``HH:MM - HH:MM``."""
    return f"{course.start_time:%H:%M} - {course.end_time:%H:%M}"
