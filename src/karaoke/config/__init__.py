"""Configuration module for the karaoke service."""

from .settings import (
    DatabaseSettings,
    KaraokeSettings,
    ObservabilitySettings,
    RedisSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "KaraokeSettings",
    "ObservabilitySettings",
    "RedisSettings",
    "Settings",
    "get_settings",
]
