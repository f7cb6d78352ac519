"""Tests for @mention extraction and the logging notifier."""

import logging

import pytest

from karaoke.infrastructure.notifications import LoggingMentionNotifier, extract_mentions


class TestExtractMentions:
    """Test extract_mentions()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("@freddie", ["freddie"]),
            ("@freddie and @brian", ["freddie", "brian"]),
            ("Sung by @roger.taylor.", ["roger.taylor"]),
            ("@john_deacon, @brian-may!", ["john_deacon", "brian-may"]),
            ("@freddie with @freddie again", ["freddie"]),
            ("mail me at fan@queen.com", []),
            ("@@double", []),
            ("just a @ sign", []),
            ("no mentions here", []),
        ],
    )
    def test_extract(self, text: str, expected: list[str]):
        assert extract_mentions(text) == expected


class TestLoggingMentionNotifier:
    """Test LoggingMentionNotifier."""

    @pytest.mark.asyncio
    async def test_logs_one_notification_per_user(self, caplog: pytest.LogCaptureFixture):
        notifier = LoggingMentionNotifier()

        with caplog.at_level(logging.INFO, logger="karaoke.infrastructure.notifications"):
            mentions = await notifier.notify_mentions(
                "@freddie and @brian", "manager-1", {"song_id": "s1"}
            )

        assert mentions == ["freddie", "brian"]
        records = [r for r in caplog.records if "[NOTIFICATION]" in r.getMessage()]
        assert [r.getMessage() for r in records] == [
            "[NOTIFICATION] freddie was mentioned by manager-1",
            "[NOTIFICATION] brian was mentioned by manager-1",
        ]
        assert records[0].song_id == "s1"

    @pytest.mark.asyncio
    async def test_no_mentions_logs_nothing(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.INFO):
            mentions = await LoggingMentionNotifier().notify_mentions("Freddie", "m1")

        assert mentions == []
        assert not any("[NOTIFICATION]" in r.getMessage() for r in caplog.records)
