"""SQLAlchemy ORM models for the karaoke service."""

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# Hey future me, utc_now() ensures ALL timestamps are UTC! Never use datetime.now() without
# timezone - that's "naive" datetime and causes bugs when servers are in different timezones.
def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


# Hey future me - SQLite doesn't preserve timezone info! When we store UTC datetimes, they come
# back as "naive" (no tzinfo). Use this when handing DB timestamps to the domain so everything
# downstream is timezone-aware.
def ensure_utc_aware(dt: datetime) -> datetime:
    """Ensure datetime is UTC-aware, assuming naive datetimes are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    """Base class for all ORM models.

    All models inherit from this to share one metadata registry.
    """

    pass


# Listen up, the catalog is IMPORTED out-of-band (scripts/import_karaoke_catalog.py) and never
# written by the API. ~25k rows. artist and title are indexed because every listing sorts by
# (artist, title) and searches both columns. The unique (artist, title) pair makes re-imports
# of the same catalog file harmless.
class KaraokeSongModel(Base):
    """SQLAlchemy model for a karaoke catalog song."""

    __tablename__ = "karaoke_songs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    artist: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # "VR" flag in the catalog file: backing track has the lead vocal reduced
    is_voice_reduced: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, server_default="0", default=False
    )
    # "M" flag in the catalog file: MIDI backing track
    is_midi: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, server_default="0", default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )

    # Relationships
    performances: Mapped[list["KaraokePlayedSongModel"]] = relationship(
        "KaraokePlayedSongModel",
        back_populates="song",
        cascade="all, delete-orphan",
        # id breaks ties between performances logged in the same instant
        order_by=lambda: [
            KaraokePlayedSongModel.created_at.desc(),
            KaraokePlayedSongModel.id.desc(),
        ],
    )
    favorites: Mapped[list["KaraokeFavoriteModel"]] = relationship(
        "KaraokeFavoriteModel",
        back_populates="song",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        sa.UniqueConstraint("artist", "title", name="uq_karaoke_songs_artist_title"),
    )


class KaraokeFavoriteModel(Base):
    """Pivot between users and the songs they favorited."""

    __tablename__ = "karaoke_favorites"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Users live in the surrounding backend, so no FK here - just the id.
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    song_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("karaoke_songs.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )

    song: Mapped["KaraokeSongModel"] = relationship(
        "KaraokeSongModel", back_populates="favorites"
    )

    __table_args__ = (
        sa.UniqueConstraint("user_id", "song_id", name="uq_karaoke_favorites_user_song"),
    )


# Hey future me - this is APPEND-ONLY! One row per "somebody sang this" event. No updated_at on
# purpose. manager_id is who logged it; it is stored for auditing but NEVER returned by the API
# (see PerformanceSummary) so the lounge log can't be mined for "who logged what".
class KaraokePlayedSongModel(Base):
    """A logged karaoke performance."""

    __tablename__ = "karaoke_played_songs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    song_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("karaoke_songs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    performers: Mapped[str] = mapped_column(Text, nullable=False)
    manager_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )

    song: Mapped["KaraokeSongModel"] = relationship(
        "KaraokeSongModel", back_populates="performances"
    )


class AccessTokenModel(Base):
    """Bearer tokens issued by the surrounding backend's login flow.

    Read-only for this service; we only resolve a token to its user id.
    """

    __tablename__ = "access_tokens"

    token: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )
