"""
Search API Endpoints.

Text search, tag and date filters, and search-as-you-type helpers.
"""

from datetime import date

from fastapi import APIRouter, Query

from modules.notebook.api.results import unwrap
from modules.notebook.core.dependencies import DbSession, OwnerId, SearchConfig
from modules.notebook.schemas.base import ApiResponse
from modules.notebook.schemas.search import SearchResults, SearchSuggestion, TagCount
from modules.notebook.services.search import SearchService
from modules.notebook.services.suggestion import SuggestionService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[SearchResults],
    summary="Search notes",
    description="Case-insensitive search over note titles and contents.",
)
async def search_notes(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    q: str = Query(default="", max_length=200, description="Search query"),
    limit: int | None = Query(default=None, ge=1, le=100, description="Maximum number of results"),
) -> ApiResponse[SearchResults]:
    """Search notes by text."""
    service = SearchService(db, search_config)
    results = unwrap(await service.search_by_text(owner_id, q, limit=limit))
    return ApiResponse(data=results)


@router.get(
    "/tags",
    response_model=ApiResponse[SearchResults],
    summary="Filter notes by tags",
    description="Notes carrying every requested tag, optionally narrowed by a text query.",
)
async def filter_by_tags(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    tags: list[str] = Query(default=[], description="Required tags (repeat the parameter)"),
    q: str | None = Query(default=None, max_length=200, description="Optional text query"),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> ApiResponse[SearchResults]:
    """Filter notes by tags (AND)."""
    service = SearchService(db, search_config)
    results = unwrap(await service.filter_by_tags(owner_id, tags, search_query=q, limit=limit))
    return ApiResponse(data=results)


@router.get(
    "/dates",
    response_model=ApiResponse[SearchResults],
    summary="Filter notes by creation date",
    description="Notes created between start and end (whole days, inclusive).",
)
async def filter_by_date_range(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    start: date | None = Query(default=None, description="First day (YYYY-MM-DD)"),
    end: date | None = Query(default=None, description="Last day (YYYY-MM-DD)"),
    q: str | None = Query(default=None, max_length=200),
    tags: list[str] = Query(default=[]),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> ApiResponse[SearchResults]:
    """Filter notes by date range."""
    service = SearchService(db, search_config)
    results = unwrap(
        await service.filter_by_date_range(
            owner_id,
            start,
            end,
            search_query=q,
            tags=tags,
            limit=limit,
        )
    )
    return ApiResponse(data=results)


@router.get(
    "/suggestions",
    response_model=ApiResponse[list[SearchSuggestion]],
    summary="Suggest notes for a partial query",
)
async def suggest_for_query(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    q: str = Query(default="", max_length=200),
    limit: int | None = Query(default=None, ge=1, le=50),
) -> ApiResponse[list[SearchSuggestion]]:
    """Ranked note suggestions."""
    service = SuggestionService(db, search_config)
    suggestions = unwrap(await service.suggest_for_query(owner_id, q, limit=limit))
    return ApiResponse(data=suggestions)


@router.get(
    "/completions",
    response_model=ApiResponse[list[str]],
    summary="Complete a partial query",
)
async def suggest_query_completions(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    q: str = Query(default="", max_length=200),
) -> ApiResponse[list[str]]:
    """Words from the owner's notes that extend the query."""
    service = SuggestionService(db, search_config)
    completions = unwrap(await service.suggest_query_completions(owner_id, q))
    return ApiResponse(data=completions)


@router.get(
    "/popular-tags",
    response_model=ApiResponse[list[TagCount]],
    summary="Popular tags for the search box",
    description="Best effort: an empty list is returned when tags cannot be loaded.",
)
async def popular_tags(
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
    limit: int | None = Query(default=None, ge=1, le=50),
) -> ApiResponse[list[TagCount]]:
    """Most used tags."""
    service = SuggestionService(db, search_config)
    tags = unwrap(await service.popular_tags(owner_id, limit=limit))
    return ApiResponse(data=tags)

