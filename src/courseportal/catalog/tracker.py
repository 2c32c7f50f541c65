"""Per-user record of the last visited course."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from courseportal.cache import CacheError
from courseportal.catalog.models import RecentCourse

if TYPE_CHECKING:
    from courseportal.cache import CacheBackend
    from courseportal.catalog_store import Course

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60


class RecentCourseTracker:
    """Remembers the last course each user opened.

    Entries live in the cache backend and their expiry restarts on every visit.
    Tracking is best effort: cache failures are logged, never raised.
    """

    def __init__(self, backend: CacheBackend, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self.backend = backend
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(user_id: str) -> str:
        return f"last_course:{user_id}"

    def record_visit(self, user_id: str, course: Course) -> None:
        """Store ``course`` as the user's last visited course."""
        payload = json.dumps(
            {
                "course_id": course.id,
                "course_name": course.name,
                "visited_at": datetime.now(UTC).isoformat(),
            }
        ).encode("utf-8")
        try:
            self.backend.set(self._key(user_id), payload, self.ttl_seconds)
        except CacheError as e:
            logger.warning("Could not record last visited course for %s: %s", user_id, e)

    def last_visited(self, user_id: str) -> RecentCourse | None:
        """Return the user's last visited course, if still remembered."""
        try:
            payload = self.backend.get(self._key(user_id))
        except CacheError as e:
            logger.warning("Could not read last visited course for %s: %s", user_id, e)
            return None
        if not payload:
            return None

        try:
            data = json.loads(payload)
            return RecentCourse(
                course_id=data["course_id"],
                course_name=data["course_name"],
                visited_at=datetime.fromisoformat(data["visited_at"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable last-course entry for %s: %s", user_id, e)
            return None
