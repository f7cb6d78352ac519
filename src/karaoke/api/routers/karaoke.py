"""Karaoke catalog, favorites and performance log endpoints."""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, Response, status

from karaoke.api.dependencies import (
    get_current_user_optional,
    get_favorite_service,
    get_performance_log_service,
    get_song_query_service,
    require_current_user,
)
from karaoke.api.schemas import (
    KaraokePerformedSongsData,
    KaraokeSongData,
    KaraokeSongResponseData,
    NoteCreateData,
    UserAuthorizedToCreateKaraokeLogs,
)
from karaoke.application.services import (
    FavoriteService,
    PerformanceLogService,
    SongQueryService,
)
from karaoke.domain.entities import CurrentUser, FavoriteStatus, SongListCriteria

logger = logging.getLogger(__name__)

router = APIRouter()


# Hey future me - the browsing endpoint. Anonymous is fine, but then you MUST search (3+ chars).
# Logged in users can also ask for favorite=true without a search. The 400s come from
# SongQueryService as InvalidQueryError; the limit clamping happens there too, so the response
# "limit" tells the client what page size it actually got.
@router.get("", response_model=KaraokeSongResponseData)
async def list_songs(
    search: str | None = Query(None, description="Case-insensitive artist/title substring"),
    favorite: bool = Query(False, description="Only return the caller's favorites"),
    start: int = Query(0, ge=0, description="Offset of the first song"),
    limit: int | None = Query(None, description="Page size, clamped to the configured maximum"),
    user: CurrentUser | None = Depends(get_current_user_optional),
    service: SongQueryService = Depends(get_song_query_service),
) -> KaraokeSongResponseData:
    """List catalog songs matching a search string and/or the caller's favorites."""
    page = await service.list_songs(
        SongListCriteria(search=search, favorites_only=favorite, start=start, limit=limit),
        user,
    )
    return KaraokeSongResponseData.from_page(page)


# Static paths MUST stay above /{song_id}, otherwise "latest" gets parsed as a UUID and 422s.
@router.get("/latest", response_model=list[KaraokePerformedSongsData])
async def get_latest_performed_songs(
    service: SongQueryService = Depends(get_song_query_service),
) -> list[KaraokePerformedSongsData]:
    """Get the most recently performed songs, newest first."""
    performances = await service.latest_performed()
    return [KaraokePerformedSongsData.from_entity(p) for p in performances]


@router.get("/userismanager", response_model=UserAuthorizedToCreateKaraokeLogs)
async def user_is_manager(
    user: CurrentUser = Depends(require_current_user),
    service: PerformanceLogService = Depends(get_performance_log_service),
) -> UserAuthorizedToCreateKaraokeLogs:
    """Tell the client whether to show the 'log performance' UI."""
    return UserAuthorizedToCreateKaraokeLogs(
        is_authorized=await service.is_authorized_logger(user)
    )


@router.get("/{song_id}", response_model=KaraokeSongData)
async def get_song(
    song_id: uuid.UUID,
    user: CurrentUser | None = Depends(get_current_user_optional),
    service: SongQueryService = Depends(get_song_query_service),
) -> KaraokeSongData:
    """Get one song with its performances."""
    item = await service.get_song(str(song_id), user)
    return KaraokeSongData.from_entity(item)


# Yo, adding twice is fine: 201 the first time, 200 afterwards, empty body both times.
@router.post(
    "/{song_id}/favorite",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={200: {"description": "Song was already a favorite"}},
)
async def add_favorite(
    song_id: uuid.UUID,
    user: CurrentUser = Depends(require_current_user),
    service: FavoriteService = Depends(get_favorite_service),
) -> Response:
    """Mark a song as favorite."""
    result = await service.add_favorite(user, str(song_id))
    if result is FavoriteStatus.ALREADY_EXISTS:
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post(
    "/{song_id}/favorite/remove",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_favorite_post(
    song_id: uuid.UUID,
    user: CurrentUser = Depends(require_current_user),
    service: FavoriteService = Depends(get_favorite_service),
) -> Response:
    """Remove a favorite (POST alias for clients that can't send DELETE)."""
    await service.remove_favorite(user, str(song_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{song_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_favorite(
    song_id: uuid.UUID,
    user: CurrentUser = Depends(require_current_user),
    service: FavoriteService = Depends(get_favorite_service),
) -> Response:
    """Remove a favorite. Removing a song that isn't a favorite is not an error."""
    await service.remove_favorite(user, str(song_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{song_id}/logperformance",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
)
async def log_performance(
    song_id: uuid.UUID,
    data: NoteCreateData,
    user: CurrentUser = Depends(require_current_user),
    service: PerformanceLogService = Depends(get_performance_log_service),
) -> Response:
    """Record that a song was just performed. Song managers only."""
    await service.log_performance(user, str(song_id), data.note)
    return Response(status_code=status.HTTP_201_CREATED)
