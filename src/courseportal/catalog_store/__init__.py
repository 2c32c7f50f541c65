"""Catalog Store - Persistent storage for courses and enrollments."""

from courseportal.catalog_store.exceptions import (
    CatalogStoreError,
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
from courseportal.catalog_store.seed import DEMO_COURSES, seed_demo_courses
from courseportal.catalog_store.store import CatalogStore, EnrollmentTransaction

__all__ = [
    "DEMO_COURSES",
    "CatalogStore",
    "CatalogStoreError",
    "Course",
    "CourseCapacityExceededError",
    "CourseExistsError",
    "CourseNotFoundError",
    "Enrollment",
    "EnrollmentNotFoundError",
    "EnrollmentPersistenceError",
    "EnrollmentState",
    "EnrollmentTransaction",
    "seed_demo_courses",
]
