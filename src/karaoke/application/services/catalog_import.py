# Hey future me - the catalog is loaded OUT OF BAND, never through the HTTP API. The karaoke
# host hands us a tab separated dump of their song books, one song per line:
#
#   Queen<TAB>Bohemian Rhapsody<TAB>VR
#   ABBA<TAB>Dancing Queen
#   # lines starting with # are comments
#
# Third column is optional flags: VR = voice reduced backing track, M = midi. Re-running the
# import with the same file adds nothing, (artist, title) is the identity of a catalog song.
# Commits happen every batch_size songs so a 40k line file doesn't hold the SQLite write lock
# for the whole run.
"""Bulk import of the karaoke catalog from tab separated song lists."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from karaoke.domain.entities import KaraokeSong
from karaoke.infrastructure.persistence import Database, SongRepository

logger = logging.getLogger(__name__)

VOICE_REDUCED_FLAGS = frozenset({"VR"})
MIDI_FLAGS = frozenset({"M", "MIDI"})


@dataclass(frozen=True)
class CatalogEntry:
    """One parsed line of a catalog file."""

    artist: str
    title: str
    is_voice_reduced: bool = False
    is_midi: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.artist, self.title)


@dataclass
class ImportStats:
    """Counters reported at the end of an import run."""

    lines_read: int = 0
    imported: int = 0
    skipped_existing: int = 0
    skipped_invalid: int = 0


def parse_catalog_line(line: str) -> CatalogEntry | None:
    """Parse one catalog line.

    Returns:
        The entry, or None for blank lines, comments and lines without both
        an artist and a title
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = [part.strip() for part in stripped.split("\t")]
    if len(fields) < 2 or not fields[0] or not fields[1]:
        return None

    flags = {
        flag.upper()
        for part in fields[2:]
        for flag in part.replace(",", " ").split()
    }
    return CatalogEntry(
        artist=fields[0],
        title=fields[1],
        is_voice_reduced=bool(flags & VOICE_REDUCED_FLAGS),
        is_midi=bool(flags & MIDI_FLAGS),
    )


class CatalogImporter:
    """Loads catalog lines into the song table in committed batches."""

    def __init__(self, database: Database, batch_size: int = 500) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._database = database
        self._batch_size = batch_size

    async def import_lines(self, lines: Iterable[str]) -> ImportStats:
        """Import catalog lines, skipping songs that are already present.

        Args:
            lines: Raw catalog lines (trailing newlines allowed)

        Returns:
            Counters for read, imported and skipped lines
        """
        stats = ImportStats()
        async with self._database.session_scope() as session:
            known = await SongRepository(session).get_catalog_keys()

        batch: list[KaraokeSong] = []
        for line in lines:
            stats.lines_read += 1
            entry = parse_catalog_line(line)
            if entry is None:
                if line.strip() and not line.lstrip().startswith("#"):
                    stats.skipped_invalid += 1
                    logger.debug(f"Skipping malformed catalog line {stats.lines_read}")
                continue
            if entry.key in known:
                stats.skipped_existing += 1
                continue

            known.add(entry.key)
            batch.append(
                KaraokeSong(
                    id=str(uuid.uuid4()),
                    artist=entry.artist,
                    title=entry.title,
                    is_voice_reduced=entry.is_voice_reduced,
                    is_midi=entry.is_midi,
                )
            )
            if len(batch) >= self._batch_size:
                stats.imported += await self._flush(batch)
                batch = []
                # let other writers at the database between batches
                await asyncio.sleep(0)

        if batch:
            stats.imported += await self._flush(batch)

        logger.info(
            "Catalog import finished",
            extra={
                "lines_read": stats.lines_read,
                "imported": stats.imported,
                "skipped_existing": stats.skipped_existing,
                "skipped_invalid": stats.skipped_invalid,
            },
        )
        return stats

    async def import_file(self, path: Path, encoding: str = "utf-8") -> ImportStats:
        """Import a catalog file."""
        logger.info(f"Importing karaoke catalog from {path}")
        text = path.read_text(encoding=encoding, errors="replace")
        return await self.import_lines(text.splitlines())

    async def _flush(self, batch: list[KaraokeSong]) -> int:
        async with self._database.session_scope() as session:
            await SongRepository(session).add_many(batch)
        logger.debug(f"Committed {len(batch)} catalog songs")
        return len(batch)
