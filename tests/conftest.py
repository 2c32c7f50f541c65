"""Shared pytest fixtures and configuration."""

import pytest

from courseportal.cache import CacheUnavailableError
from courseportal.catalog_store import CatalogStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class FakeCacheBackend:
    """In-memory CacheBackend with a manual clock.

    Set ``available = False`` to make every call fail like an unreachable
    Redis server.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.available = True
        self._data: dict[str, tuple[bytes, float]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _check(self) -> None:
        if not self.available:
            raise CacheUnavailableError("cache is down")

    def get(self, key: str) -> bytes | None:
        self._check()
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.now >= expires_at:
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self._check()
        self._data[key] = (value, self.now + ttl_seconds)

    def delete(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)

    def ping(self) -> bool:
        return self.available

    def keys(self) -> list[str]:
        return list(self._data)


# Shared fixtures


@pytest.fixture
def fake_cache() -> FakeCacheBackend:
    """Empty in-memory cache backend."""
    return FakeCacheBackend()


@pytest.fixture
def store():
    """Create an in-memory CatalogStore."""
    s = CatalogStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def seeded_store(store: CatalogStore) -> CatalogStore:
    """In-memory CatalogStore holding the reference courses BD101, IO201, PROG101."""
    from courseportal.catalog_store import seed_demo_courses  # noqa: PLC0415

    seed_demo_courses(store)
    return store
