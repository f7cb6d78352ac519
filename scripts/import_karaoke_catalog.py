#!/usr/bin/env python3
"""Import the karaoke song catalog from a tab separated file.

Hey future me - this is how songs get INTO the catalog. The API never writes
songs. One song per line, tab separated:

    artist<TAB>title[<TAB>flags]

flags: VR = voice reduced, M = midi. Blank lines and lines starting with #
are ignored. Songs already in the catalog (same artist AND title) are skipped,
so running the import twice is harmless.

Usage:
    python scripts/import_karaoke_catalog.py catalog.tsv

    # Or against another database:
    DATABASE__URL=sqlite+aiosqlite:///./other.db python scripts/import_karaoke_catalog.py catalog.tsv

Run `alembic upgrade head` first (or pass --create-tables for a scratch database).
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from karaoke.application.services import CatalogImporter  # noqa: E402
from karaoke.config import get_settings  # noqa: E402
from karaoke.infrastructure.observability import configure_logging  # noqa: E402
from karaoke.infrastructure.persistence import Database  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import a karaoke catalog file")
    parser.add_argument("catalog", type=Path, help="Tab separated catalog file")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=500,
        help="Songs per committed batch (default: 500)",
    )
    parser.add_argument(
        "--encoding", default="utf-8", help="Catalog file encoding (default: utf-8)"
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before importing (scratch databases only)",
    )
    return parser.parse_args(argv)


async def run_import(args: argparse.Namespace) -> int:
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )

    db = Database(settings.database)
    try:
        if args.create_tables:
            await db.create_tables()
        importer = CatalogImporter(db, batch_size=args.batch_size)
        stats = await importer.import_file(args.catalog, encoding=args.encoding)
    finally:
        await db.close()

    print(
        f"Read {stats.lines_read} lines: imported {stats.imported}, "
        f"skipped {stats.skipped_existing} existing and {stats.skipped_invalid} malformed"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if not args.catalog.is_file():
        print(f"ERROR: catalog file not found: {args.catalog}", file=sys.stderr)
        return 1
    return asyncio.run(run_import(args))


if __name__ == "__main__":
    sys.exit(main())
