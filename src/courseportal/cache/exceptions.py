"""Exceptions for the cache backend."""


class CacheError(Exception):
    """Base exception for cache errors."""


class CacheUnavailableError(CacheError):
    """The cache server could not be reached or rejected the command."""
