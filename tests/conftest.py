"""Shared pytest fixtures.

Hey future me - every test that touches the database gets its OWN SQLite file under
tmp_path, created from the ORM metadata (no alembic). The HTTP tests drive the app through
httpx.AsyncClient + ASGITransport on the SAME event loop as the async engine; FastAPI's
TestClient would run the app on a different loop and aiosqlite hates that. ASGITransport does
not run the lifespan, so we put db/role_store/notifier on app.state ourselves.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from karaoke.config import Settings
from karaoke.domain.ports import IMentionNotifier, IRoleMembershipStore
from karaoke.infrastructure.notifications import LoggingMentionNotifier
from karaoke.infrastructure.persistence import (
    AccessTokenModel,
    Database,
    KaraokePlayedSongModel,
    KaraokeSongModel,
)
from karaoke.main import create_app

MANAGER_ROLE_SET = "KaraokeSongManagers"


class InMemoryRoleStore(IRoleMembershipStore):
    """Role membership store backed by plain sets."""

    def __init__(self, members: dict[str, set[str]] | None = None) -> None:
        self.members: dict[str, set[str]] = members or {}
        self.calls: list[tuple[str, str]] = []

    async def is_member(self, user_id: str, role_set: str) -> bool:
        self.calls.append((user_id, role_set))
        return user_id in self.members.get(role_set, set())

    def grant(self, user_id: str, role_set: str = MANAGER_ROLE_SET) -> None:
        self.members.setdefault(role_set, set()).add(user_id)

    def revoke(self, user_id: str, role_set: str = MANAGER_ROLE_SET) -> None:
        self.members.get(role_set, set()).discard(user_id)


class RecordingMentionNotifier(IMentionNotifier):
    """Wraps the real notifier and remembers every call."""

    def __init__(self) -> None:
        self._inner = LoggingMentionNotifier()
        self.calls: list[dict[str, Any]] = []

    async def notify_mentions(
        self, text: str, author_id: str, context: dict[str, Any] | None = None
    ) -> list[str]:
        mentions = await self._inner.notify_mentions(text, author_id, context)
        self.calls.append(
            {"text": text, "author_id": author_id, "context": context, "mentions": mentions}
        )
        return mentions


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings pointing at a throwaway SQLite file."""
    return Settings(
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'karaoke_test.db'}"},
        redis={"url": "redis://localhost:6379/15"},
        log_level="DEBUG",
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Create a database with all tables."""
    db = Database(settings.database)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.close()


@pytest.fixture
def role_store() -> InMemoryRoleStore:
    return InMemoryRoleStore()


@pytest.fixture
def mention_notifier() -> RecordingMentionNotifier:
    return RecordingMentionNotifier()


@pytest.fixture
def app(
    settings: Settings,
    database: Database,
    role_store: InMemoryRoleStore,
    mention_notifier: RecordingMentionNotifier,
) -> FastAPI:
    """Create the application wired to test doubles."""
    application = create_app(settings)
    application.state.db = database
    application.state.role_store = role_store
    application.state.mention_notifier = mention_notifier
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


class Seeder:
    """Writes fixture rows straight through the ORM."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def songs(self, songs: list[tuple[str, str]], **flags: bool) -> list[str]:
        """Insert catalog songs, returning their ids in input order."""
        ids = [str(uuid.uuid4()) for _ in songs]
        async with self.database.session_scope() as session:
            session.add_all(
                [
                    KaraokeSongModel(id=song_id, artist=artist, title=title, **flags)
                    for song_id, (artist, title) in zip(ids, songs, strict=True)
                ]
            )
        return ids

    async def song(self, artist: str, title: str, **flags: bool) -> str:
        return (await self.songs([(artist, title)], **flags))[0]

    async def token(self, token: str, user_id: str) -> dict[str, str]:
        """Insert an access token and return matching request headers."""
        async with self.database.session_scope() as session:
            session.add(AccessTokenModel(token=token, user_id=user_id))
        return {"Authorization": f"Bearer {token}"}

    async def performance(
        self,
        song_id: str,
        performers: str,
        manager_id: str = "manager-1",
        created_at: datetime | None = None,
    ) -> None:
        """Insert a logged performance directly."""
        async with self.database.session_scope() as session:
            session.add(
                KaraokePlayedSongModel(
                    song_id=song_id,
                    performers=performers,
                    manager_id=manager_id,
                    created_at=created_at or datetime.now(UTC),
                )
            )


@pytest.fixture
def seed(database: Database) -> Seeder:
    return Seeder(database)
