"""Custom exceptions for Catalog Store."""


class CatalogStoreError(Exception):
    """Base exception for Catalog Store errors."""


class CourseNotFoundError(CatalogStoreError):
    """Course with given ID does not exist."""


class CourseExistsError(CatalogStoreError):
    """Course with given code already exists."""


class EnrollmentNotFoundError(CatalogStoreError):
    """Enrollment with given ID does not exist."""


class CourseCapacityExceededError(CatalogStoreError):
    """Saving the enrollment would push the course over its capacity."""


class EnrollmentPersistenceError(CatalogStoreError):
    """The enrollment could not be written, usually a concurrent conflict."""
