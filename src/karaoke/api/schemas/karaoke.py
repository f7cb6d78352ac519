"""API schemas for the karaoke catalog."""

from datetime import datetime

from pydantic import BaseModel, Field

from karaoke.domain.entities import PerformanceSummary, SongPage, SongWithFavorite


class KaraokePerformedSongsData(BaseModel):
    """One logged performance. Never exposes the manager who logged it."""

    artist: str = Field(..., description="Song artist")
    title: str = Field(..., description="Song title")
    performers: str = Field(..., description="Free text naming who sang")
    time: datetime = Field(..., description="When the performance was logged (UTC)")

    @classmethod
    def from_entity(cls, performance: PerformanceSummary) -> "KaraokePerformedSongsData":
        return cls(
            artist=performance.artist,
            title=performance.title,
            performers=performance.performers,
            time=performance.performed_at,
        )


class KaraokeSongData(BaseModel):
    """A catalog song as returned to clients."""

    song_id: str = Field(..., description="Song ID")
    artist: str = Field(..., description="Song artist")
    title: str = Field(..., description="Song title")
    is_voice_reduced: bool = Field(
        default=False, description="Backing track is a voice-reduced original recording"
    )
    is_midi: bool = Field(default=False, description="Backing track is a MIDI rendition")
    is_favorite: bool = Field(
        default=False, description="Caller marked this song as favorite (false when anonymous)"
    )
    performances: list[KaraokePerformedSongsData] = Field(
        default_factory=list, description="Logged performances, newest first"
    )

    @classmethod
    def from_entity(cls, item: SongWithFavorite) -> "KaraokeSongData":
        song = item.song
        return cls(
            song_id=song.id,
            artist=song.artist,
            title=song.title,
            is_voice_reduced=song.is_voice_reduced,
            is_midi=song.is_midi,
            is_favorite=item.is_favorite,
            performances=[
                KaraokePerformedSongsData.from_entity(p) for p in song.performances
            ],
        )


class KaraokeSongResponseData(BaseModel):
    """One page of a catalog listing."""

    total_songs: int = Field(..., description="Songs matching the filters, ignoring paging")
    start: int = Field(..., description="Offset of the first returned song")
    limit: int = Field(..., description="Effective page size after clamping")
    songs: list[KaraokeSongData] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: SongPage) -> "KaraokeSongResponseData":
        return cls(
            total_songs=page.total_songs,
            start=page.start,
            limit=page.limit,
            songs=[KaraokeSongData.from_entity(item) for item in page.songs],
        )


class NoteCreateData(BaseModel):
    """Request body for logging a performance."""

    note: str = Field(..., description="Who performed, may contain @mentions")


class UserAuthorizedToCreateKaraokeLogs(BaseModel):
    """Whether the caller may log performances."""

    is_authorized: bool
