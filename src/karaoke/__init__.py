"""Karaoke Lounge - song catalog, favorites and performance log service."""

__version__ = "1.0.0"
