"""Dependency injection for API endpoints."""

import logging
from collections.abc import AsyncGenerator
from typing import cast

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from karaoke.application.services import (
    FavoriteService,
    PerformanceLogService,
    SongQueryService,
)
from karaoke.config import Settings
from karaoke.domain.entities import CurrentUser
from karaoke.domain.exceptions import AuthenticationError
from karaoke.domain.ports import IMentionNotifier, IRoleMembershipStore
from karaoke.infrastructure.persistence import (
    AccessTokenRepository,
    Database,
    FavoriteRepository,
    PerformanceRepository,
    SongRepository,
)

logger = logging.getLogger(__name__)


# Hey future me - settings live on app.state (create_app puts them there), NOT the cached
# get_settings(). That way tests can build an app with max_page_size=3 and a temp database
# without touching env vars or clearing lru_caches.
def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return cast(Settings, request.app.state.settings)


# Hey future me - this is a FastAPI dependency that yields a DB session to endpoints.
# session_scope() commits when the endpoint returns normally and rolls back on ANY exception,
# including our domain exceptions. FastAPI caches dependencies per request, so every repository
# in one request shares this one session (and this one transaction).
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state.

    Uses session_scope() context manager for proper connection lifecycle management.
    FastAPI automatically handles cleanup when the request completes.
    """
    db: Database = request.app.state.db
    async with db.session_scope() as session:
        yield session


def get_role_store(request: Request) -> IRoleMembershipStore:
    """Get the role membership store from app state.

    Raises:
        HTTPException: 503 if the store was not initialized
    """
    if not hasattr(request.app.state, "role_store"):
        raise HTTPException(status_code=503, detail="Role store not initialized")
    return cast(IRoleMembershipStore, request.app.state.role_store)


def get_mention_notifier(request: Request) -> IMentionNotifier:
    """Get the mention notifier from app state."""
    return cast(IMentionNotifier, request.app.state.mention_notifier)


def parse_bearer_token(authorization: str) -> str:
    """Parse Authorization header to extract the access token.

    Handles both "Bearer {token}" and raw token formats.
    Bearer prefix is case-insensitive.

    Args:
        authorization: Authorization header value

    Returns:
        Token with Bearer prefix removed (if present)
    """
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return authorization.strip()


# Yo, optional auth! Anonymous callers are fine for browsing, they just never see favorites.
# An unknown token is treated like no token here - the endpoints that NEED a user go through
# require_current_user, which turns None into a 401. Blank "Authorization: " headers count as
# absent.
async def get_current_user_optional(
    authorization: str | None = Header(None),
    session: AsyncSession = Depends(get_db_session),
) -> CurrentUser | None:
    """Resolve the caller from the Authorization header, if any.

    Returns:
        The caller, or None for anonymous requests and unknown tokens
    """
    if not authorization or not authorization.strip():
        return None

    token = parse_bearer_token(authorization)
    if not token:
        return None

    user_id = await AccessTokenRepository(session).get_user_id(token)
    if user_id is None:
        logger.debug("Unknown access token presented")
        return None
    return CurrentUser(user_id=user_id)


async def require_current_user(
    user: CurrentUser | None = Depends(get_current_user_optional),
) -> CurrentUser:
    """Require an authenticated caller.

    Raises:
        AuthenticationError: If the request carries no valid token
    """
    if user is None:
        raise AuthenticationError()
    return user


def get_song_query_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> SongQueryService:
    """Get song query service instance."""
    return SongQueryService(
        songs=SongRepository(session),
        favorites=FavoriteRepository(session),
        performances=PerformanceRepository(session),
        settings=settings.karaoke,
    )


def get_favorite_service(
    session: AsyncSession = Depends(get_db_session),
) -> FavoriteService:
    """Get favorite service instance."""
    return FavoriteService(
        songs=SongRepository(session),
        favorites=FavoriteRepository(session),
    )


def get_performance_log_service(
    session: AsyncSession = Depends(get_db_session),
    role_store: IRoleMembershipStore = Depends(get_role_store),
    notifier: IMentionNotifier = Depends(get_mention_notifier),
    settings: Settings = Depends(get_app_settings),
) -> PerformanceLogService:
    """Get performance log service instance."""
    return PerformanceLogService(
        songs=SongRepository(session),
        performances=PerformanceRepository(session),
        role_store=role_store,
        notifier=notifier,
        settings=settings.karaoke,
    )
