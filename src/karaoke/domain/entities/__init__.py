"""Domain entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


# Hey future me, these are DOMAIN ENTITIES (not DB models)! Plain dataclasses, no SQLAlchemy and
# no Pydantic in here. The repositories convert ORM rows to these, the API schemas convert these
# to JSON. Keep them dumb.
@dataclass(frozen=True)
class PerformanceSummary:
    """One logged performance as shown to the public.

    Carries no manager id: the log shows who sang, never who typed it in.
    """

    artist: str
    title: str
    performers: str
    performed_at: datetime


@dataclass
class KaraokeSong:
    """A song in the karaoke catalog. Catalog data is read-only for this service."""

    id: str
    artist: str
    title: str
    is_voice_reduced: bool = False
    is_midi: bool = False
    performances: list[PerformanceSummary] = field(default_factory=list)


@dataclass(frozen=True)
class SongWithFavorite:
    """A catalog song plus the caller's favorite flag."""

    song: KaraokeSong
    is_favorite: bool = False


@dataclass(frozen=True)
class SongPage:
    """One page of a catalog listing."""

    total_songs: int
    start: int
    limit: int
    songs: list[SongWithFavorite]


@dataclass
class PerformedSong:
    """An entry of the append-only performance log."""

    id: str
    song_id: str
    performers: str
    manager_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class CurrentUser:
    """Identity of an authenticated caller."""

    user_id: str


@dataclass(frozen=True)
class SongListCriteria:
    """Raw listing options as the client sent them (limit not yet clamped)."""

    search: str | None = None
    favorites_only: bool = False
    start: int = 0
    limit: int | None = None


class FavoriteStatus(str, Enum):
    """Outcome of adding a favorite. Both values are successes."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


__all__ = [
    "CurrentUser",
    "FavoriteStatus",
    "KaraokeSong",
    "PerformanceSummary",
    "PerformedSong",
    "SongListCriteria",
    "SongPage",
    "SongWithFavorite",
]
