"""Runtime configuration for Course Portal."""

from __future__ import annotations

from pydantic import PositiveInt, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "COURSEPORTAL_"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


class Settings(BaseSettings):
    """Service settings read from COURSEPORTAL_* environment variables.

    Attributes:
        db_path: Path to the SQLite database file, or ":memory:".
        redis_url: Connection URL for the Redis cache.
        cache_prefix: Prefix applied to every cache key.
        catalog_ttl: Absolute expiry of the cached active-course list, in seconds.
        recent_course_ttl: How long a user's last visited course is kept, in seconds.
        seed_demo: Load the reference courses when the catalog is empty.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_ignore_empty=True,
        frozen=True,
    )

    db_path: str = "courseportal.db"
    redis_url: str = "redis://localhost:6379/0"
    cache_prefix: str = "courseportal:"
    catalog_ttl: PositiveInt = 60
    recent_course_ttl: PositiveInt = 30 * 60
    seed_demo: bool = True

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from the environment.

        Returns:
            Settings with defaults for every unset variable.

        Raises:
            ConfigError: If a variable fails validation.
        """
        try:
            return cls()
        except ValidationError as e:
            problems = "; ".join(
                f"{ENV_PREFIX}{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(problems) from e
