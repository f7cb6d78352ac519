"""Song Query Service - catalog listing, single-song lookup and the latest performances.

Hey future me - this is where the listing RULES live. The catalog has tens of thousands of
songs, so nobody gets to page through it unfiltered: a listing needs either a search string of
min_search_length characters or the favorites filter. The repository only knows how to compose
filters (ISongQuery); deciding which ones apply is our job.
"""

from __future__ import annotations

import logging

from karaoke.config.settings import KaraokeSettings
from karaoke.domain.entities import (
    CurrentUser,
    KaraokeSong,
    PerformanceSummary,
    SongListCriteria,
    SongPage,
    SongWithFavorite,
)
from karaoke.domain.exceptions import EntityNotFoundException, InvalidQueryError
from karaoke.domain.ports import IFavoriteRepository, IPerformanceRepository, ISongRepository

logger = logging.getLogger(__name__)

# Artist, then title. id breaks ties so pages never overlap when two rows share both.
SONG_SORT_ORDER = ("artist", "title", "id")


class SongQueryService:
    """Read-side operations over the karaoke catalog."""

    def __init__(
        self,
        songs: ISongRepository,
        favorites: IFavoriteRepository,
        performances: IPerformanceRepository,
        settings: KaraokeSettings,
    ) -> None:
        """Initialize service.

        Args:
            songs: Song catalog repository
            favorites: Favorite relation repository
            performances: Performance log repository
            settings: Karaoke tunables (page sizes, search length)
        """
        self._songs = songs
        self._favorites = favorites
        self._performances = performances
        self._settings = settings

    def clamp_limit(self, limit: int | None) -> int:
        """Resolve the effective page size.

        A missing limit falls back to the default page size; anything else is
        clamped into [1, max_page_size].
        """
        if limit is None:
            limit = self._settings.default_page_size
        return max(1, min(limit, self._settings.max_page_size))

    # Yo, the order of checks matters and matches what clients have always seen:
    # 1. favorites requested but nobody logged in -> "Must be logged in to view favorites"
    # 2. no favorites filter and no usable search -> "Search string must have at least N characters."
    # A short search string is still APPLIED when combined with the favorites filter - it only
    # fails to count as a filter of its own.
    async def list_songs(
        self, criteria: SongListCriteria, caller: CurrentUser | None
    ) -> SongPage:
        """List catalog songs matching the criteria.

        Args:
            criteria: Search text, favorites flag and paging as sent by the client
            caller: Authenticated caller, or None for anonymous requests

        Returns:
            One page of songs (sorted by artist, then title) with the total match count

        Raises:
            InvalidQueryError: If favorites are requested anonymously, or no
                filter strong enough to run the query was given
        """
        start = max(criteria.start, 0)
        limit = self.clamp_limit(criteria.limit)

        query = self._songs.query()
        if criteria.search is not None:
            query = query.filter_by_text(criteria.search)

        filtering_favorites = False
        if criteria.favorites_only:
            if caller is None:
                raise InvalidQueryError("Must be logged in to view favorites")
            query = query.filter_by_favorite(caller.user_id)
            filtering_favorites = True

        search_is_usable = (
            criteria.search is not None
            and len(criteria.search) >= self._settings.min_search_length
        )
        if not filtering_favorites and not search_is_usable:
            raise InvalidQueryError(
                f"Search string must have at least {self._settings.min_search_length} characters."
            )

        total = await query.count()
        songs = await query.sort_by(*SONG_SORT_ORDER).paginate(start, limit).fetch()

        favorite_ids: set[str] = set()
        if caller is not None:
            favorite_ids = await self._favorites.get_song_ids(caller.user_id)

        logger.debug(
            "Listed karaoke songs",
            extra={
                "search": criteria.search,
                "favorites_only": criteria.favorites_only,
                "start": start,
                "limit": limit,
                "total_songs": total,
            },
        )
        return SongPage(
            total_songs=total,
            start=start,
            limit=limit,
            songs=[
                SongWithFavorite(song=song, is_favorite=song.id in favorite_ids)
                for song in songs
            ],
        )

    async def get_song(self, song_id: str, caller: CurrentUser | None) -> SongWithFavorite:
        """Get one song with its performances and the caller's favorite flag.

        Raises:
            EntityNotFoundException: If no song has this id
        """
        song: KaraokeSong | None = await self._songs.get_by_id(song_id)
        if song is None:
            raise EntityNotFoundException("Karaoke song", song_id)

        is_favorite = False
        if caller is not None:
            is_favorite = await self._favorites.exists(caller.user_id, song_id)
        return SongWithFavorite(song=song, is_favorite=is_favorite)

    async def latest_performed(self) -> list[PerformanceSummary]:
        """Get the most recently logged performances, newest first."""
        return await self._performances.get_latest(self._settings.latest_performance_count)
