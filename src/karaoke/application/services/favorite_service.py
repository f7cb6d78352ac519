"""Favorite Service - per-user favorite marks on catalog songs."""

from __future__ import annotations

import logging

from karaoke.domain.entities import CurrentUser, FavoriteStatus
from karaoke.domain.exceptions import EntityNotFoundException
from karaoke.domain.ports import IFavoriteRepository, ISongRepository

logger = logging.getLogger(__name__)


class FavoriteService:
    """Add and remove favorites for the calling user."""

    def __init__(self, songs: ISongRepository, favorites: IFavoriteRepository) -> None:
        self._songs = songs
        self._favorites = favorites

    # Hey future me - adding is idempotent! A second add is NOT an error, the router just answers
    # 200 instead of 201. The exists() check handles the normal case; repo.add() returning False
    # handles the race where another request inserted between our check and our insert.
    async def add_favorite(self, caller: CurrentUser, song_id: str) -> FavoriteStatus:
        """Mark a song as favorite for the caller.

        Args:
            caller: Authenticated caller
            song_id: Catalog song id

        Returns:
            CREATED if a new favorite was stored, ALREADY_EXISTS otherwise

        Raises:
            EntityNotFoundException: If no song has this id
        """
        if not await self._songs.exists(song_id):
            raise EntityNotFoundException("Karaoke song", song_id)

        if await self._favorites.exists(caller.user_id, song_id):
            return FavoriteStatus.ALREADY_EXISTS

        if not await self._favorites.add(caller.user_id, song_id):
            logger.info(
                "Concurrent favorite insert, treating as existing",
                extra={"user_id": caller.user_id, "song_id": song_id},
            )
            return FavoriteStatus.ALREADY_EXISTS

        logger.info(
            "Added karaoke favorite",
            extra={"user_id": caller.user_id, "song_id": song_id},
        )
        return FavoriteStatus.CREATED

    async def remove_favorite(self, caller: CurrentUser, song_id: str) -> bool:
        """Remove the caller's favorite mark. Missing favorites are not an error.

        Returns:
            True if a favorite was actually deleted
        """
        removed = await self._favorites.remove(caller.user_id, song_id)
        if removed:
            logger.info(
                "Removed karaoke favorite",
                extra={"user_id": caller.user_id, "song_id": song_id},
            )
        return removed
