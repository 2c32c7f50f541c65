"""Exceptions for the catalog module."""


class CatalogError(Exception):
    """Base exception for catalog errors."""


class FilterValidationError(CatalogError):
    """Catalog filter parameters were rejected.

    The message is meant to be shown to the user next to the search form.
    """


class CourseWindowError(CatalogError):
    """A course would end at or before the time it starts."""
