"""Repository implementations for the karaoke domain."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from karaoke.domain.entities import KaraokeSong, PerformanceSummary, PerformedSong
from karaoke.domain.ports import (
    IAccessTokenRepository,
    IFavoriteRepository,
    IPerformanceRepository,
    ISongQuery,
    ISongRepository,
)

from .models import (
    AccessTokenModel,
    KaraokeFavoriteModel,
    KaraokePlayedSongModel,
    KaraokeSongModel,
    ensure_utc_aware,
)

logger = logging.getLogger(__name__)

# Sort keys clients of ISongQuery may use. Anything else is a programming error.
_SORTABLE_COLUMNS: dict[str, Any] = {
    "artist": KaraokeSongModel.artist,
    "title": KaraokeSongModel.title,
    "id": KaraokeSongModel.id,
}


def _escape_like(value: str, escape_char: str = "\\") -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )


def _song_to_entity(model: KaraokeSongModel) -> KaraokeSong:
    """Convert a song row (performances must be eager-loaded) to a domain entity."""
    return KaraokeSong(
        id=model.id,
        artist=model.artist,
        title=model.title,
        is_voice_reduced=model.is_voice_reduced,
        is_midi=model.is_midi,
        performances=[
            PerformanceSummary(
                artist=model.artist,
                title=model.title,
                performers=played.performers,
                performed_at=ensure_utc_aware(played.created_at),
            )
            for played in model.performances
        ],
    )


# Hey future me, this is the SQLAlchemy side of the ISongQuery port. It just accumulates a
# Select statement - no I/O until count() or fetch(). count() wraps the statement in a subquery
# WITHOUT order/limit so the total reflects the whole filtered set, which is what the pagination
# UI needs. performances are selectin-loaded (one extra IN query per page, not N+1). Don't
# access model.performances on a row you didn't eager-load - async SQLAlchemy will blow up
# with MissingGreenlet instead of lazy loading!
class SqlSongQuery(ISongQuery):
    """ISongQuery implementation over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._stmt: Select[Any] = select(KaraokeSongModel)
        self._order_by: list[Any] = []
        self._start = 0
        self._limit: int | None = None

    def filter_by_text(self, text: str) -> SqlSongQuery:
        pattern = f"%{_escape_like(text)}%"
        self._stmt = self._stmt.where(
            or_(
                KaraokeSongModel.artist.ilike(pattern, escape="\\"),
                KaraokeSongModel.title.ilike(pattern, escape="\\"),
            )
        )
        return self

    def filter_by_favorite(self, user_id: str) -> SqlSongQuery:
        self._stmt = self._stmt.join(
            KaraokeFavoriteModel, KaraokeFavoriteModel.song_id == KaraokeSongModel.id
        ).where(KaraokeFavoriteModel.user_id == user_id)
        return self

    def sort_by(self, *fields: str) -> SqlSongQuery:
        for name in fields:
            column = _SORTABLE_COLUMNS.get(name)
            if column is None:
                raise ValueError(f"Cannot sort karaoke songs by '{name}'")
            self._order_by.append(column.asc())
        return self

    def paginate(self, start: int, limit: int) -> SqlSongQuery:
        self._start = start
        self._limit = limit
        return self

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self._stmt.subquery())
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def fetch(self) -> list[KaraokeSong]:
        stmt = self._stmt.options(selectinload(KaraokeSongModel.performances)).order_by(
            *self._order_by
        )
        if self._limit is not None:
            stmt = stmt.offset(self._start).limit(self._limit)
        result = await self.session.execute(stmt)
        return [_song_to_entity(model) for model in result.scalars().all()]


class SongRepository(ISongRepository):
    """SQLAlchemy implementation of the karaoke song catalog."""

    # Repos never commit - Database.session_scope() does that when the request finishes.
    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    def query(self) -> SqlSongQuery:
        """Start a new unfiltered catalog query."""
        return SqlSongQuery(self.session)

    async def get_by_id(self, song_id: str) -> KaraokeSong | None:
        """Get a song by ID, including its performances."""
        stmt = (
            select(KaraokeSongModel)
            .where(KaraokeSongModel.id == song_id)
            .options(selectinload(KaraokeSongModel.performances))
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return _song_to_entity(model)

    async def exists(self, song_id: str) -> bool:
        """Check whether a song with this ID is in the catalog."""
        stmt = select(KaraokeSongModel.id).where(KaraokeSongModel.id == song_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_catalog_keys(self) -> set[tuple[str, str]]:
        """Get the (artist, title) pair of every song in the catalog."""
        result = await self.session.execute(
            select(KaraokeSongModel.artist, KaraokeSongModel.title)
        )
        return {(row.artist, row.title) for row in result.all()}

    async def add_many(self, songs: list[KaraokeSong]) -> None:
        """Stage catalog songs for insertion."""
        self.session.add_all(
            [
                KaraokeSongModel(
                    id=song.id,
                    artist=song.artist,
                    title=song.title,
                    is_voice_reduced=song.is_voice_reduced,
                    is_midi=song.is_midi,
                )
                for song in songs
            ]
        )


class FavoriteRepository(IFavoriteRepository):
    """SQLAlchemy implementation of the favorite relation."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def get_song_ids(self, user_id: str) -> set[str]:
        """Get the ids of all songs the user has favorited."""
        stmt = select(KaraokeFavoriteModel.song_id).where(
            KaraokeFavoriteModel.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def exists(self, user_id: str, song_id: str) -> bool:
        """Check whether the user has favorited the song."""
        stmt = (
            select(KaraokeFavoriteModel.id)
            .where(
                KaraokeFavoriteModel.user_id == user_id,
                KaraokeFavoriteModel.song_id == song_id,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    # Hey future me - two requests can both see "no favorite yet" and both INSERT. The unique
    # constraint lets exactly one win; the loser lands here with IntegrityError. We flush right
    # away so the violation surfaces HERE (not at commit time in session_scope) and translate it
    # into "already exists". The rollback is required: PostgreSQL aborts the whole transaction on
    # a constraint violation, so nothing else can run on this session until we roll back.
    async def add(self, user_id: str, song_id: str) -> bool:
        """Insert a favorite, returning False if the pair already exists."""
        self.session.add(KaraokeFavoriteModel(user_id=user_id, song_id=song_id))
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.debug(
                "Favorite insert hit unique constraint",
                extra={"user_id": user_id, "song_id": song_id},
            )
            return False
        return True

    async def remove(self, user_id: str, song_id: str) -> bool:
        """Delete a favorite. Returns True if a row was deleted."""
        stmt = delete(KaraokeFavoriteModel).where(
            KaraokeFavoriteModel.user_id == user_id,
            KaraokeFavoriteModel.song_id == song_id,
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)  # type: ignore[attr-defined]


class PerformanceRepository(IPerformanceRepository):
    """SQLAlchemy implementation of the performance log."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, performance: PerformedSong) -> None:
        """Append a performance entry."""
        self.session.add(
            KaraokePlayedSongModel(
                id=performance.id,
                song_id=performance.song_id,
                performers=performance.performers,
                manager_id=performance.manager_id,
                created_at=performance.created_at,
            )
        )

    async def get_latest(self, limit: int) -> list[PerformanceSummary]:
        """Get the most recent performances, newest first."""
        stmt = (
            select(KaraokePlayedSongModel)
            .options(selectinload(KaraokePlayedSongModel.song))
            .order_by(
                KaraokePlayedSongModel.created_at.desc(),
                KaraokePlayedSongModel.id.desc(),
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            PerformanceSummary(
                artist=played.song.artist,
                title=played.song.title,
                performers=played.performers,
                performed_at=ensure_utc_aware(played.created_at),
            )
            for played in result.scalars().all()
        ]


class AccessTokenRepository(IAccessTokenRepository):
    """Resolves bearer tokens stored by the surrounding backend."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def get_user_id(self, token: str) -> str | None:
        """Resolve a token to its user id, or None if unknown."""
        stmt = select(AccessTokenModel.user_id).where(AccessTokenModel.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
