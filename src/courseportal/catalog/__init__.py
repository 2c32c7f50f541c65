"""Catalog - course listing, search and cache."""

from courseportal.catalog.cache import ACTIVE_COURSES_KEY, CatalogCache
from courseportal.catalog.exceptions import CatalogError, CourseWindowError, FilterValidationError
from courseportal.catalog.filters import parse_time, validate_filters
from courseportal.catalog.models import CatalogResult, CourseDetail, RecentCourse
from courseportal.catalog.query import CourseQuery
from courseportal.catalog.service import CatalogService
from courseportal.catalog.tracker import RecentCourseTracker

__all__ = [
    "ACTIVE_COURSES_KEY",
    "CatalogCache",
    "CatalogError",
    "CatalogResult",
    "CatalogService",
    "CourseDetail",
    "CourseQuery",
    "CourseWindowError",
    "FilterValidationError",
    "RecentCourse",
    "RecentCourseTracker",
    "parse_time",
    "validate_filters",
]
