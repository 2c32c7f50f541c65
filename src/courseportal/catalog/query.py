"""Catalog Query Engine - filtered course search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import and_, func, or_

from courseportal.catalog.filters import is_blank, parse_time
from courseportal.catalog_store import Course

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from courseportal.catalog_store import CatalogStore


@dataclass(frozen=True)
class CourseQuery:
    """Filter specification for a catalog search.

    Attributes:
        name: Case-sensitive substring of the course code or name.
        credits_min: Lower credit bound, ignored unless > 0.
        credits_max: Upper credit bound, ignored unless > 0.
        start_time: Earliest start time (``HH:MM``), ignored if unparsable.
        end_time: Latest end time (``HH:MM``), ignored if unparsable.
    """

    name: str | None = None
    credits_min: int | None = None
    credits_max: int | None = None
    start_time: str | None = None
    end_time: str | None = None

    def is_empty(self) -> bool:
        """True when no filter parameter was supplied."""
        return (
            is_blank(self.name)
            and self.credits_min is None
            and self.credits_max is None
            and is_blank(self.start_time)
            and is_blank(self.end_time)
        )

    def condition(self) -> ColumnElement[bool] | None:
        """Combine the name and credit filters into one SQL predicate."""
        clauses: list[ColumnElement[bool]] = []

        if not is_blank(self.name):
            # SQLite LIKE ignores ASCII case; instr() does not
            clauses.append(
                or_(
                    func.instr(Course.name, self.name) > 0,
                    func.instr(Course.code, self.name) > 0,
                )
            )
        if self.credits_min is not None and self.credits_min > 0:
            clauses.append(Course.credits >= self.credits_min)
        if self.credits_max is not None and self.credits_max > 0:
            clauses.append(Course.credits <= self.credits_max)

        if not clauses:
            return None
        return and_(*clauses)

    def matches_time_window(self, course: Course) -> bool:
        """Apply the time filters to a materialized course."""
        start = parse_time(self.start_time)
        if start is not None and course.start_time < start:
            return False
        end = parse_time(self.end_time)
        if end is not None and course.end_time > end:
            return False
        return True

    def run(self, store: CatalogStore) -> list[Course]:
        """Execute against active courses, bypassing any cache."""
        courses = store.list_courses(active_only=True, condition=self.condition())
        return [c for c in courses if self.matches_time_window(c)]

