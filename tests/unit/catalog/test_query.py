"""Unit tests for the catalog query engine."""

from datetime import time

import pytest

from courseportal.catalog import CourseQuery
from courseportal.catalog_store import CatalogStore


def _codes(courses) -> list[str]:
    return [c.code for c in courses]


@pytest.mark.unit
class TestCourseQuery:
    """Tests for CourseQuery against the reference courses."""

    def test_is_empty(self) -> None:
        assert CourseQuery().is_empty()
        assert CourseQuery(name="  ", start_time="").is_empty()
        assert not CourseQuery(credits_min=0).is_empty()
        assert not CourseQuery(name="BD").is_empty()

    def test_credit_range(self, seeded_store: CatalogStore) -> None:
        """credits_min=4, credits_max=5 returns every reference course."""
        courses = CourseQuery(credits_min=4, credits_max=5).run(seeded_store)

        assert _codes(courses) == ["BD101", "IO201", "PROG101"]

    def test_credits_min_only(self, seeded_store: CatalogStore) -> None:
        assert _codes(CourseQuery(credits_min=5).run(seeded_store)) == ["IO201"]

    def test_zero_bounds_ignored(self, seeded_store: CatalogStore) -> None:
        """Credit bounds of zero do not filter."""
        courses = CourseQuery(credits_min=0, credits_max=0).run(seeded_store)

        assert len(courses) == 3

    def test_name_matches_code(self, seeded_store: CatalogStore) -> None:
        assert _codes(CourseQuery(name="BD").run(seeded_store)) == ["BD101"]

    def test_name_matches_name(self, seeded_store: CatalogStore) -> None:
        assert _codes(CourseQuery(name="Programación").run(seeded_store)) == ["PROG101"]

    def test_name_is_case_sensitive(self, seeded_store: CatalogStore) -> None:
        """Lowercase 'bd' does not match 'BD101'."""
        assert CourseQuery(name="bd").run(seeded_store) == []

    def test_name_treats_wildcards_literally(self, seeded_store: CatalogStore) -> None:
        assert CourseQuery(name="%").run(seeded_store) == []

    def test_time_window(self, seeded_store: CatalogStore) -> None:
        """Courses must start at or after start_time and end at or before end_time."""
        courses = CourseQuery(start_time="08:00", end_time="12:00").run(seeded_store)

        assert _codes(courses) == ["BD101", "IO201"]

    def test_start_time_only(self, seeded_store: CatalogStore) -> None:
        assert _codes(CourseQuery(start_time="10:00").run(seeded_store)) == ["IO201", "PROG101"]

    def test_unparsable_time_skipped(self, seeded_store: CatalogStore) -> None:
        courses = CourseQuery(start_time="soon", end_time="12:00").run(seeded_store)

        assert _codes(courses) == ["BD101", "IO201"]

    def test_combined_filters(self, seeded_store: CatalogStore) -> None:
        """All predicates must hold. 'I' matches IO201 by code and PROG101 by name."""
        courses = CourseQuery(name="I", credits_max=4, end_time="16:00").run(seeded_store)

        assert _codes(courses) == ["PROG101"]

    def test_inactive_courses_excluded(self, seeded_store: CatalogStore) -> None:
        seeded_store.update_course(1, active=False)

        assert CourseQuery(name="BD").run(seeded_store) == []

    def test_results_ordered_by_id(self, store: CatalogStore) -> None:
        for code in ("ZZ1", "AA1"):
            store.create_course(
                code=code,
                name="Seminar",
                credits=2,
                capacity=10,
                start_time=time(8, 0),
                end_time=time(9, 0),
            )

        assert _codes(CourseQuery(name="Seminar").run(store)) == ["ZZ1", "AA1"]
