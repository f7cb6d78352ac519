"""create karaoke tables

Revision ID: a1c3e5f7b901
Revises:
Create Date: 2026-10-18 10:00:00.000000

Hey future me - this is the INITIAL schema:
- karaoke_songs: the imported catalog, unique per (artist, title)
- karaoke_favorites: user <-> song pivot, unique per (user_id, song_id)
- karaoke_played_songs: append-only performance log
- access_tokens: bearer tokens issued by the surrounding backend (read-only here)

Users and role sets live outside this database, so user_id/manager_id are plain
strings without foreign keys.
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1c3e5f7b901"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "karaoke_songs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("artist", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("is_voice_reduced", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("is_midi", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("artist", "title", name="uq_karaoke_songs_artist_title"),
    )
    op.create_index("ix_karaoke_songs_artist", "karaoke_songs", ["artist"])
    op.create_index("ix_karaoke_songs_title", "karaoke_songs", ["title"])

    op.create_table(
        "karaoke_favorites",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column(
            "song_id",
            sa.String(36),
            sa.ForeignKey("karaoke_songs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "song_id", name="uq_karaoke_favorites_user_song"),
    )
    op.create_index("ix_karaoke_favorites_user_id", "karaoke_favorites", ["user_id"])

    op.create_table(
        "karaoke_played_songs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "song_id",
            sa.String(36),
            sa.ForeignKey("karaoke_songs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("performers", sa.Text(), nullable=False),
        sa.Column("manager_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_karaoke_played_songs_song_id", "karaoke_played_songs", ["song_id"]
    )
    op.create_index(
        "ix_karaoke_played_songs_created_at", "karaoke_played_songs", ["created_at"]
    )

    op.create_table(
        "access_tokens",
        sa.Column("token", sa.String(255), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_access_tokens_user_id", "access_tokens", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_access_tokens_user_id", table_name="access_tokens")
    op.drop_table("access_tokens")
    op.drop_index("ix_karaoke_played_songs_created_at", table_name="karaoke_played_songs")
    op.drop_index("ix_karaoke_played_songs_song_id", table_name="karaoke_played_songs")
    op.drop_table("karaoke_played_songs")
    op.drop_index("ix_karaoke_favorites_user_id", table_name="karaoke_favorites")
    op.drop_table("karaoke_favorites")
    op.drop_index("ix_karaoke_songs_title", table_name="karaoke_songs")
    op.drop_index("ix_karaoke_songs_artist", table_name="karaoke_songs")
    op.drop_table("karaoke_songs")
