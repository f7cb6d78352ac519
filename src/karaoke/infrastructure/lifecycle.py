"""Application lifecycle management for startup and shutdown tasks.

This module handles the FastAPI lifespan context manager that creates the
shared resources (database engine, Redis client, mention notifier) and puts
them on ``app.state`` where the API dependencies pick them up.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

from fastapi import FastAPI

from karaoke.config import Settings
from karaoke.domain.exceptions import ConfigurationError
from karaoke.infrastructure.notifications import LoggingMentionNotifier
from karaoke.infrastructure.observability import configure_logging
from karaoke.infrastructure.persistence import Database
from karaoke.infrastructure.roles import RedisRoleMembershipStore

logger = logging.getLogger(__name__)


# Hey future me, this validates SQLite paths BEFORE we try creating the DB engine! SQLite needs
# to create temp files (-journal, -wal) next to the .db file, so we check the directory is
# writable. We DON'T pre-create the .db file - SQLite handles that. Returns early for anything
# that isn't a file-backed SQLite URL.
def _validate_sqlite_path(settings: Settings) -> None:
    """Validate SQLite database path accessibility before engine creation."""
    db_path = settings._get_sqlite_db_path()
    if db_path is None:
        return

    try:
        if db_path.parent and str(db_path.parent) != ".":
            db_path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Ensured SQLite parent directory exists: %s", db_path.parent)
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to create SQLite database directory '{db_path.parent}': {exc}. "
            "Update DATABASE__URL or adjust directory permissions."
        ) from exc

    try:
        test_file = db_path.parent / f".{db_path.stem}_write_test"
        test_file.write_bytes(b"test")
        test_file.unlink()
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to write files in database directory '{db_path.parent}': {exc}. "
            "SQLite requires write permissions to create database and journal files."
        ) from exc


# Listen future me, everything before `yield` runs at STARTUP, everything after at SHUTDOWN.
# The try/finally makes sure we close whatever DID get opened even if startup fails halfway.
# There are no background workers here - the service is request/response only.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles:
    - Logging configuration
    - Database initialization
    - Redis role store connection
    - Resource cleanup
    """
    settings = cast(Settings, app.state.settings)

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s", settings.app_name)

    try:
        _validate_sqlite_path(settings)

        db = Database(settings.database)
        app.state.db = db
        logger.info("Database initialized: %s", settings.database.url)

        role_store = RedisRoleMembershipStore.from_settings(settings.redis)
        app.state.role_store = role_store
        if await role_store.ping():
            logger.info("Role store connected: %s", settings.redis.url)
        else:
            # Not fatal: /health/ready reports it and manager checks fail until Redis is back
            logger.warning("Role store not reachable at startup: %s", settings.redis.url)

        app.state.mention_notifier = LoggingMentionNotifier()

        yield
    except Exception as e:
        logger.exception("Error during application startup: %s", e)
        raise
    finally:
        logger.info("Shutting down application")

        role_store = getattr(app.state, "role_store", None)
        if isinstance(role_store, RedisRoleMembershipStore):
            try:
                await role_store.close()
                logger.info("Role store connection closed")
            except Exception as e:
                logger.exception("Error closing role store: %s", e)

        try:
            if hasattr(app.state, "db"):
                await app.state.db.close()
                logger.info("Database connection closed")
        except Exception as e:
            logger.exception("Error closing database: %s", e)
