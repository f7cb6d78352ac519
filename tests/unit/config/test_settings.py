"""Tests for application settings."""

from pathlib import Path

import pytest

from karaoke.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.api_prefix == "/api/v3"
    assert settings.karaoke.default_page_size == 50
    assert settings.karaoke.max_page_size == 200
    assert settings.karaoke.min_search_length == 3
    assert settings.karaoke.latest_performance_count == 10
    assert settings.karaoke.manager_role_set == "KaraokeSongManagers"


def test_nested_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KARAOKE__MAX_PAGE_SIZE", "25")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///data/lounge.db")

    settings = Settings()

    assert settings.karaoke.max_page_size == 25
    assert settings.database.url == "sqlite+aiosqlite:///data/lounge.db"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite+aiosqlite:///./karaoke.db", Path("./karaoke.db")),
        ("sqlite+aiosqlite:////var/lib/karaoke/karaoke.db", Path("/var/lib/karaoke/karaoke.db")),
        ("sqlite+aiosqlite:///:memory:", None),
        ("postgresql+asyncpg://user:pw@db/karaoke", None),
    ],
)
def test_sqlite_db_path(url: str, expected: Path | None):
    settings = Settings(database={"url": url})
    assert settings._get_sqlite_db_path() == expected
