"""Tests for the catalog importer.

Hey future me - parse_catalog_line is pure, the importer tests run against the real
temp SQLite database from conftest so batching and de-duplication are exercised for real.
"""

from pathlib import Path

import pytest
from sqlalchemy import select

from karaoke.application.services import CatalogImporter, parse_catalog_line
from karaoke.application.services.catalog_import import CatalogEntry
from karaoke.infrastructure.persistence import Database, KaraokeSongModel


class TestParseCatalogLine:
    """Test parse_catalog_line()."""

    def test_artist_and_title(self):
        assert parse_catalog_line("Queen\tBohemian Rhapsody\n") == CatalogEntry(
            artist="Queen", title="Bohemian Rhapsody"
        )

    def test_voice_reduced_flag(self):
        entry = parse_catalog_line("Queen\tBohemian Rhapsody\tVR")
        assert entry is not None
        assert entry.is_voice_reduced is True
        assert entry.is_midi is False

    def test_midi_flag_case_insensitive(self):
        entry = parse_catalog_line("ABBA\tDancing Queen\tm")
        assert entry is not None
        assert entry.is_midi is True

    def test_multiple_flags(self):
        entry = parse_catalog_line("ABBA\tDancing Queen\tVR, M")
        assert entry is not None
        assert entry.is_voice_reduced is True
        assert entry.is_midi is True

    def test_fields_are_trimmed(self):
        entry = parse_catalog_line("  Toto \t Africa  ")
        assert entry is not None
        assert entry.key == ("Toto", "Africa")

    @pytest.mark.parametrize(
        "line",
        ["", "   \n", "# comment", "  # indented comment", "Queen only", "Queen\t", "\tAfrica"],
    )
    def test_unusable_lines(self, line: str):
        assert parse_catalog_line(line) is None


class TestCatalogImporter:
    """Test CatalogImporter against a real database."""

    async def _catalog(self, database: Database) -> list[tuple[str, str, bool, bool]]:
        async with database.session_scope() as session:
            result = await session.execute(
                select(KaraokeSongModel).order_by(KaraokeSongModel.artist, KaraokeSongModel.title)
            )
            return [
                (s.artist, s.title, s.is_voice_reduced, s.is_midi)
                for s in result.scalars().all()
            ]

    @pytest.mark.asyncio
    async def test_import_lines(self, database: Database):
        importer = CatalogImporter(database, batch_size=2)

        stats = await importer.import_lines(
            [
                "# Lounge catalog",
                "Queen\tBohemian Rhapsody\tVR",
                "ABBA\tDancing Queen",
                "",
                "garbage line",
                "Queen\tWe Will Rock You\tM",
                "Queen\tBohemian Rhapsody",
            ]
        )

        assert stats.lines_read == 7
        assert stats.imported == 3
        assert stats.skipped_existing == 1
        assert stats.skipped_invalid == 1
        assert await self._catalog(database) == [
            ("ABBA", "Dancing Queen", False, False),
            ("Queen", "Bohemian Rhapsody", True, False),
            ("Queen", "We Will Rock You", False, True),
        ]

    @pytest.mark.asyncio
    async def test_reimport_adds_nothing(self, database: Database):
        lines = ["Queen\tBohemian Rhapsody", "ABBA\tDancing Queen"]
        await CatalogImporter(database).import_lines(lines)

        stats = await CatalogImporter(database).import_lines(lines)

        assert stats.imported == 0
        assert stats.skipped_existing == 2
        assert len(await self._catalog(database)) == 2

    @pytest.mark.asyncio
    async def test_import_file(self, database: Database, tmp_path: Path):
        catalog = tmp_path / "catalog.tsv"
        catalog.write_text("Toto\tAfrica\nEurope\tThe Final Countdown\tVR\n", encoding="utf-8")

        stats = await CatalogImporter(database).import_file(catalog)

        assert stats.imported == 2

    def test_batch_size_must_be_positive(self, database: Database):
        with pytest.raises(ValueError):
            CatalogImporter(database, batch_size=0)
