"""API request/response schemas."""

from karaoke.api.schemas.karaoke import (
    KaraokePerformedSongsData,
    KaraokeSongData,
    KaraokeSongResponseData,
    NoteCreateData,
    UserAuthorizedToCreateKaraokeLogs,
)

__all__ = [
    "KaraokePerformedSongsData",
    "KaraokeSongData",
    "KaraokeSongResponseData",
    "NoteCreateData",
    "UserAuthorizedToCreateKaraokeLogs",
]
