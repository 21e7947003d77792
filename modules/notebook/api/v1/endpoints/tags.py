"""
Tags API Endpoints.

Per-owner tag listings and usage statistics.
"""

from fastapi import APIRouter, Query

from modules.notebook.api.results import unwrap
from modules.notebook.core.dependencies import DbSession, OwnerId, SearchConfig
from modules.notebook.schemas.base import ApiResponse
from modules.notebook.schemas.search import TagCount
from modules.notebook.services.tag import TagService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[str]],
    summary="List tags",
    description="Every distinct tag on active notes, alphabetically.",
)
async def list_tags(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
) -> ApiResponse[list[str]]:
    service = TagService(db, search_config)
    return ApiResponse(data=unwrap(await service.user_tags(owner_id)))


@router.get(
    "/stats",
    response_model=ApiResponse[list[TagCount]],
    summary="Tag usage statistics",
)
async def tag_stats(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
) -> ApiResponse[list[TagCount]]:
    service = TagService(db, search_config)
    return ApiResponse(data=unwrap(await service.tag_stats(owner_id)))


@router.get(
    "/popular",
    response_model=ApiResponse[list[TagCount]],
    summary="Most used tags",
)
async def popular_tags(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    limit: int | None = Query(default=None, ge=1, le=50),
) -> ApiResponse[list[TagCount]]:
    service = TagService(db, search_config)
    return ApiResponse(data=unwrap(await service.popular_tags(owner_id, limit=limit)))
