"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from typing import Any

from karaoke.domain.entities import KaraokeSong, PerformanceSummary, PerformedSong


# Hey future me, ISongQuery is the query-builder PORT! The SongQueryService decides WHICH filters
# apply (search length, favorites, login state) and this interface only says HOW to compose them.
# The SQLAlchemy implementation lives in infrastructure/persistence/repositories.py. Every builder
# method returns the builder so calls chain; nothing touches the database until count()/fetch().
class ISongQuery(ABC):
    """Composable catalog query."""

    @abstractmethod
    def filter_by_text(self, text: str) -> "ISongQuery":
        """Restrict to songs whose artist OR title contains text (case-insensitive)."""
        pass

    @abstractmethod
    def filter_by_favorite(self, user_id: str) -> "ISongQuery":
        """Restrict to songs the user has favorited."""
        pass

    @abstractmethod
    def sort_by(self, *fields: str) -> "ISongQuery":
        """Sort ascending by the given song fields, in order."""
        pass

    @abstractmethod
    def paginate(self, start: int, limit: int) -> "ISongQuery":
        """Limit results to the range [start, start + limit)."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count matching songs, ignoring pagination."""
        pass

    @abstractmethod
    async def fetch(self) -> list[KaraokeSong]:
        """Run the query and return the songs of the current page."""
        pass


class ISongRepository(ABC):
    """Repository interface for the karaoke song catalog."""

    @abstractmethod
    def query(self) -> ISongQuery:
        """Start a new unfiltered catalog query."""
        pass

    @abstractmethod
    async def get_by_id(self, song_id: str) -> KaraokeSong | None:
        """Get a song (with its performances) by ID."""
        pass

    @abstractmethod
    async def exists(self, song_id: str) -> bool:
        """Check whether a song with this ID is in the catalog."""
        pass

    @abstractmethod
    async def get_catalog_keys(self) -> set[tuple[str, str]]:
        """Get the (artist, title) pair of every song in the catalog."""
        pass

    @abstractmethod
    async def add_many(self, songs: list[KaraokeSong]) -> None:
        """Stage new catalog songs for insertion."""
        pass


class IFavoriteRepository(ABC):
    """Repository interface for the user/song favorite relation."""

    @abstractmethod
    async def get_song_ids(self, user_id: str) -> set[str]:
        """Get the ids of all songs the user has favorited."""
        pass

    @abstractmethod
    async def exists(self, user_id: str, song_id: str) -> bool:
        """Check whether the user has favorited the song."""
        pass

    @abstractmethod
    async def add(self, user_id: str, song_id: str) -> bool:
        """Insert a favorite.

        Returns:
            True if a row was inserted, False if the store reported the pair
            already exists (uniqueness violation).
        """
        pass

    @abstractmethod
    async def remove(self, user_id: str, song_id: str) -> bool:
        """Delete a favorite. Returns True if a row was deleted."""
        pass


class IPerformanceRepository(ABC):
    """Repository interface for the append-only performance log."""

    @abstractmethod
    async def add(self, performance: PerformedSong) -> None:
        """Append a performance entry."""
        pass

    @abstractmethod
    async def get_latest(self, limit: int) -> list[PerformanceSummary]:
        """Get the most recent performances, newest first."""
        pass


class IAccessTokenRepository(ABC):
    """Lookup of bearer tokens issued by the surrounding backend."""

    @abstractmethod
    async def get_user_id(self, token: str) -> str | None:
        """Resolve a token to its user id, or None if unknown."""
        pass


# Yo, role membership lives OUTSIDE our database (a Redis set in production). Keep this narrow -
# one yes/no question - so the authorization policy can be tested with a plain in-memory set.
class IRoleMembershipStore(ABC):
    """Read-only key-set store answering role membership questions."""

    @abstractmethod
    async def is_member(self, user_id: str, role_set: str) -> bool:
        """Check whether user_id is a member of role_set."""
        pass

    async def ping(self) -> bool:
        """Check store reachability. Stores without a connection are always up."""
        return True


class IMentionNotifier(ABC):
    """Collaborator that processes @mentions in user-written text."""

    @abstractmethod
    async def notify_mentions(
        self, text: str, author_id: str, context: dict[str, Any] | None = None
    ) -> list[str]:
        """Notify every user mentioned in text.

        Returns:
            The usernames that were mentioned
        """
        pass


__all__ = [
    "IAccessTokenRepository",
    "IFavoriteRepository",
    "IMentionNotifier",
    "IPerformanceRepository",
    "IRoleMembershipStore",
    "ISongQuery",
    "ISongRepository",
]
