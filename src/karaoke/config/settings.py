"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Relational store connection settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./karaoke.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Log every SQL statement")
    pool_pre_ping: bool = Field(default=True)
    # Pool settings only apply to PostgreSQL, SQLite ignores them
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_recycle: int = Field(default=3600, ge=-1)


class RedisSettings(BaseModel):
    """Role membership store connection settings."""

    url: str = Field(default="redis://localhost:6379/0")
    socket_timeout: float = Field(default=5.0, gt=0)


# Hey future me - services get THIS object handed in explicitly, so tests can build a service
# with max_page_size=3 without touching env vars.
class KaraokeSettings(BaseModel):
    """Tunables for the karaoke catalog and performance log."""

    default_page_size: int = Field(default=50, ge=1)
    max_page_size: int = Field(default=200, ge=1)
    min_search_length: int = Field(default=3, ge=1)
    latest_performance_count: int = Field(default=10, ge=1)
    manager_role_set: str = Field(
        default="KaraokeSongManagers",
        description="Redis set holding the user ids allowed to log performances",
    )
    max_performer_note_length: int = Field(default=2000, ge=1)


class ObservabilitySettings(BaseModel):
    """Logging settings."""

    log_json_format: bool = Field(default=False)
    log_request_body: bool = Field(default=False)


class Settings(BaseSettings):
    """Top-level application settings.

    Nested groups are addressed with a double underscore, e.g.
    ``DATABASE__URL`` or ``KARAOKE__MAX_PAGE_SIZE``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="karaoke-lounge")
    app_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v3")
    log_level: str = Field(default="INFO")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    karaoke: KaraokeSettings = Field(default_factory=KaraokeSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def _get_sqlite_db_path(self) -> Path | None:
        """Return the database file path for file-backed SQLite URLs, else None."""
        url = self.database.url
        if not url.startswith("sqlite"):
            return None
        _, _, path = url.partition(":///")
        if not path or path.startswith(":memory:"):
            return None
        return Path(path)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
