"""@mention processing for user-written text.

Hey future me - this is the logging-only mention notifier. The surrounding backend owns user
accounts and the actual in-app/push delivery; here we only figure out WHO was mentioned and
emit a structured [NOTIFICATION] log line per user that the delivery side can pick up.
Performers don't need accounts, so "@nobody" is fine - we can't tell and don't care.
"""

import logging
import re
from typing import Any

from karaoke.domain.ports import IMentionNotifier

logger = logging.getLogger(__name__)

# "@name" not preceded by a word char or another @ (so e-mail addresses don't count).
# Dots are allowed inside a name but a trailing dot is sentence punctuation.
MENTION_PATTERN = re.compile(
    r"(?<![\w@])@([A-Za-z0-9](?:[A-Za-z0-9_-]|\.(?=[A-Za-z0-9]))*)"
)


def extract_mentions(text: str) -> list[str]:
    """Return mentioned usernames in order of first appearance, without duplicates."""
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


class LoggingMentionNotifier(IMentionNotifier):
    """IMentionNotifier that reports mentions through the log."""

    async def notify_mentions(
        self, text: str, author_id: str, context: dict[str, Any] | None = None
    ) -> list[str]:
        mentions = extract_mentions(text)
        for username in mentions:
            logger.info(
                "[NOTIFICATION] %s was mentioned by %s",
                username,
                author_id,
                extra={
                    "mentioned_username": username,
                    "author_id": author_id,
                    **(context or {}),
                },
            )
        return mentions
