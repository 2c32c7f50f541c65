"""Cache - key-value cache backends."""

from courseportal.cache.backend import CacheBackend, RedisCacheBackend
from courseportal.cache.exceptions import CacheError, CacheUnavailableError

__all__ = [
    "CacheBackend",
    "CacheError",
    "CacheUnavailableError",
    "RedisCacheBackend",
]
