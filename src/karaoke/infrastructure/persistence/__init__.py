"""Infrastructure persistence layer."""

from .database import Database
from .models import (
    AccessTokenModel,
    Base,
    KaraokeFavoriteModel,
    KaraokePlayedSongModel,
    KaraokeSongModel,
)
from .repositories import (
    AccessTokenRepository,
    FavoriteRepository,
    PerformanceRepository,
    SongRepository,
    SqlSongQuery,
)

__all__ = [
    # Database
    "Database",
    "Base",
    # Models
    "AccessTokenModel",
    "KaraokeFavoriteModel",
    "KaraokePlayedSongModel",
    "KaraokeSongModel",
    # Repositories
    "AccessTokenRepository",
    "FavoriteRepository",
    "PerformanceRepository",
    "SongRepository",
    "SqlSongQuery",
]
