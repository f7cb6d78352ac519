"""Application services - the karaoke use cases."""

from karaoke.application.services.catalog_import import (
    CatalogEntry,
    CatalogImporter,
    ImportStats,
    parse_catalog_line,
)
from karaoke.application.services.favorite_service import FavoriteService
from karaoke.application.services.performance_log_service import PerformanceLogService
from karaoke.application.services.song_query_service import SongQueryService

__all__ = [
    "CatalogEntry",
    "CatalogImporter",
    "FavoriteService",
    "ImportStats",
    "PerformanceLogService",
    "SongQueryService",
    "parse_catalog_line",
]
