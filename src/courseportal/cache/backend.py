"""Key-value cache backends."""

from __future__ import annotations

import logging
from typing import Protocol

import redis

from courseportal.cache.exceptions import CacheUnavailableError
from courseportal.logging import sanitize_for_log

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    """Interface for the key-value cache used by the catalog."""

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when missing or expired."""
        ...

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store a value that expires ttl_seconds after this write."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...

    def ping(self) -> bool:
        """Whether the backend is reachable."""
        ...


class RedisCacheBackend:
    """CacheBackend over a Redis server.

    Every key is namespaced with ``prefix``. Redis errors surface as
    CacheUnavailableError so callers never depend on redis-py exceptions.
    """

    def __init__(self, client: redis.Redis, prefix: str = "") -> None:
        """Initialize the backend.

        Args:
            client: Connected redis-py client (bytes responses).
            prefix: Namespace prepended to every key.
        """
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "") -> RedisCacheBackend:
        """Create a backend from a redis:// URL."""
        logger.info("Connecting cache backend to %s", sanitize_for_log(url))
        return cls(redis.from_url(url), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> bytes | None:
        try:
            return self.client.get(self._key(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"GET {self._key(key)} failed: {e}") from e

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        try:
            self.client.setex(self._key(key), ttl_seconds, value)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"SETEX {self._key(key)} failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete(self._key(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"DEL {self._key(key)} failed: {e}") from e

    def ping(self) -> bool:
        """Check connectivity. Returns False instead of raising."""
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning("Cache ping failed: %s", e)
            return False

    def close(self) -> None:
        """Release the client's connection pool."""
        self.client.close()
