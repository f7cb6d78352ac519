"""Notification adapters."""

from .mention_notifier import LoggingMentionNotifier, extract_mentions

__all__ = ["LoggingMentionNotifier", "extract_mentions"]
