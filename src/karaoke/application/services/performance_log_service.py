"""Performance Log Service - managers record who sang which song."""

from __future__ import annotations

import logging
import uuid

from karaoke.config.settings import KaraokeSettings
from karaoke.domain.entities import CurrentUser, PerformedSong
from karaoke.domain.exceptions import (
    AuthorizationError,
    EntityNotFoundException,
    ValidationException,
)
from karaoke.domain.ports import (
    IMentionNotifier,
    IPerformanceRepository,
    IRoleMembershipStore,
    ISongRepository,
)

logger = logging.getLogger(__name__)


class PerformanceLogService:
    """Authorization and writes for the append-only performance log."""

    def __init__(
        self,
        songs: ISongRepository,
        performances: IPerformanceRepository,
        role_store: IRoleMembershipStore,
        notifier: IMentionNotifier,
        settings: KaraokeSettings,
    ) -> None:
        """Initialize service.

        Args:
            songs: Song catalog repository
            performances: Performance log repository
            role_store: Role membership lookup (Redis set in production)
            notifier: Collaborator that processes @mentions in the note
            settings: Karaoke tunables (role set name, note length)
        """
        self._songs = songs
        self._performances = performances
        self._role_store = role_store
        self._notifier = notifier
        self._settings = settings

    async def is_authorized_logger(self, caller: CurrentUser) -> bool:
        """Check whether the caller belongs to the song manager role set.

        Membership is looked up on every call, never cached, so revoking a manager
        takes effect on their next request.
        """
        return await self._role_store.is_member(
            caller.user_id, self._settings.manager_role_set
        )

    def validate_note(self, note: str) -> str:
        """Normalize the performers note, raising ValidationException if it is unusable."""
        performers = note.strip()
        if not performers:
            raise ValidationException("Performer note cannot be empty.")
        max_length = self._settings.max_performer_note_length
        if len(performers) > max_length:
            raise ValidationException(
                f"Performer note cannot be longer than {max_length} characters."
            )
        return performers

    # Hey future me - check order is role, then song, then note. A non-manager gets 403 even for
    # a song that doesn't exist, so the endpoint can't be used to probe the catalog. The mention
    # notifier runs LAST and its failures are only logged: the performance is the important part,
    # a broken notification must never lose it.
    async def log_performance(
        self, caller: CurrentUser, song_id: str, note: str
    ) -> PerformedSong:
        """Append a performance of a catalog song to the log.

        Args:
            caller: Authenticated caller, must be a song manager
            song_id: Catalog song id
            note: Free text naming the performers, may contain @mentions

        Returns:
            The stored log entry

        Raises:
            AuthorizationError: If the caller is not a song manager
            EntityNotFoundException: If no song has this id
            ValidationException: If the note is empty or too long
        """
        if not await self.is_authorized_logger(caller):
            logger.warning(
                "Rejected performance log from non-manager",
                extra={"user_id": caller.user_id, "song_id": song_id},
            )
            raise AuthorizationError(
                "User is not authorized to log Karaoke song performances."
            )

        if not await self._songs.exists(song_id):
            raise EntityNotFoundException("Karaoke song", song_id)

        performers = self.validate_note(note)
        entry = PerformedSong(
            id=str(uuid.uuid4()),
            song_id=song_id,
            performers=performers,
            manager_id=caller.user_id,
        )
        await self._performances.add(entry)
        logger.info(
            "Logged karaoke performance",
            extra={
                "performance_id": entry.id,
                "song_id": song_id,
                "manager_id": caller.user_id,
            },
        )

        try:
            await self._notifier.notify_mentions(
                performers,
                caller.user_id,
                {"song_id": song_id, "performance_id": entry.id},
            )
        except Exception as e:
            logger.warning(
                f"Mention processing failed for performance {entry.id}: {e}",
                exc_info=True,
            )

        return entry
