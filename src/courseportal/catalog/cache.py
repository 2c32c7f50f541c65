"""Catalog Cache - read-through cache over the active-course list."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from courseportal.cache import CacheError
from courseportal.catalog_store import Course

if TYPE_CHECKING:
    from courseportal.cache import CacheBackend
    from courseportal.catalog_store import CatalogStore

logger = logging.getLogger(__name__)

ACTIVE_COURSES_KEY = "active_courses"
DEFAULT_TTL_SECONDS = 60


class CatalogCache:
    """Caches the unfiltered list of active courses.

    The entry expires ``ttl_seconds`` after it is written (absolute, not
    sliding). Anything that creates, edits or deactivates a course must call
    invalidate(). A failing cache backend degrades to reading the store.
    """

    def __init__(
        self,
        store: CatalogStore,
        backend: CacheBackend,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key: str = ACTIVE_COURSES_KEY,
    ) -> None:
        self.store = store
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.key = key

    def get_active_courses(self) -> list[Course]:
        """Return active courses, from the cache when possible."""
        courses, _ = self.load_active_courses()
        return courses

    def load_active_courses(self) -> tuple[list[Course], bool]:
        """Return active courses and whether they were served from the cache."""
        cached = self._read()
        if cached is not None:
            return cached, True

        courses = self.store.list_courses(active_only=True)
        self._write(courses)
        logger.debug("Catalog cache miss, loaded %d courses", len(courses))
        return courses, False

    def invalidate(self) -> None:
        """Drop the cached list so the next read reloads it from the store."""
        try:
            self.backend.delete(self.key)
            logger.info("Catalog cache invalidated")
        except CacheError as e:
            logger.error("Could not invalidate catalog cache: %s", e)

    def _read(self) -> list[Course] | None:
        try:
            payload = self.backend.get(self.key)
        except CacheError as e:
            logger.warning("Catalog cache read failed, using store: %s", e)
            return None
        if not payload:
            return None

        try:
            return [Course.from_dict(item) for item in json.loads(payload)]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable catalog cache entry: %s", e)
            return None

    def _write(self, courses: list[Course]) -> None:
        payload = json.dumps([c.to_dict() for c in courses]).encode("utf-8")
        try:
            self.backend.set(self.key, payload, self.ttl_seconds)
        except CacheError as e:
            logger.warning("Catalog cache write failed: %s", e)
