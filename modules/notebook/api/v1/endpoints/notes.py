"""
Notes API Endpoints.

REST API endpoints for note management, the trash, per-note tags and
AI-generated summaries and tags.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from modules.notebook.api.results import unwrap
from modules.notebook.core.config import get_app_config
from modules.notebook.core.dependencies import (
    DbSession,
    OwnerId,
    RequestId,
    SearchConfig,
    TextClient,
)
from modules.notebook.core.pagination import (
    PageParams,
    create_paginated_response,
    get_page_params,
)
from modules.notebook.schemas.base import ApiResponse
from modules.notebook.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteTagsResponse,
    NoteUpdate,
    SummaryResponse,
)
from modules.notebook.services.ai import AiService
from modules.notebook.services.note import NoteService
from modules.notebook.services.tag import TagService

router = APIRouter()


def _ai_service(db: DbSession, client: TextClient, search_config: SearchConfig) -> AiService:
    app_config = get_app_config()
    return AiService(
        db,
        client,
        app_config.ai,
        search_config=search_config,
        enabled=app_config.features.ai_enabled,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note with a title and content.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = unwrap(await service.create_note(owner_id, data))
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get(
    "",
    summary="List notes (paginated)",
    description="Get the active notes, newest first, one page at a time.",
)
async def list_notes(
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
    pagination: PageParams = Depends(get_page_params),
) -> dict[str, Any]:
    """List notes with page-based pagination."""
    service = NoteService(db)
    page = unwrap(
        await service.list_notes(owner_id, page=pagination.page, page_size=pagination.page_size)
    )

    return create_paginated_response(
        items=page.notes,
        item_schema=NoteListResponse,
        total=page.total,
        page=page.current_page,
        page_size=page.page_size,
        request_id=request_id,
    )


@router.get(
    "/trash",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List deleted notes",
    description="Get soft-deleted notes, most recently deleted first.",
)
async def list_deleted_notes(
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
    limit: int = Query(
        default=50,
        ge=1,
        le=100,
        description="Maximum number of results",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List the trash."""
    service = NoteService(db)
    notes = unwrap(await service.list_deleted_notes(owner_id, limit=limit))
    return ApiResponse(data=[NoteResponse.model_validate(note) for note in notes])


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single active note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = unwrap(await service.get_note(owner_id, note_id))
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an active note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = unwrap(await service.update_note(owner_id, note_id, data))
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Delete a note",
    description="Move a note to the trash (soft delete).",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Soft-delete a note."""
    service = NoteService(db)
    note = unwrap(await service.delete_note(owner_id, note_id))
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.post(
    "/{note_id}/restore",
    response_model=ApiResponse[NoteResponse],
    summary="Restore a note",
    description="Restore a note from the trash.",
)
async def restore_note(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore a soft-deleted note."""
    service = NoteService(db)
    note = unwrap(await service.restore_note(owner_id, note_id))
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}/tags",
    response_model=ApiResponse[NoteTagsResponse],
    summary="Get note tags",
)
async def get_note_tags(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
) -> ApiResponse[NoteTagsResponse]:
    """Get the tags of a note."""
    service = TagService(db, search_config)
    tags = unwrap(await service.get_note_tags(owner_id, note_id))
    return ApiResponse(data=NoteTagsResponse(note_id=note_id, tags=tags))


@router.delete(
    "/{note_id}/tags/{tag}",
    response_model=ApiResponse[NoteTagsResponse],
    summary="Delete a note tag",
    description="Remove one tag from a note and return the remaining tags.",
)
async def delete_note_tag(
    note_id: str,
    tag: str,
    db: DbSession,
    owner_id: OwnerId,
    search_config: SearchConfig,
) -> ApiResponse[NoteTagsResponse]:
    """Remove a tag from a note."""
    service = TagService(db, search_config)
    tags = unwrap(await service.delete_tag(owner_id, note_id, tag))
    return ApiResponse(data=NoteTagsResponse(note_id=note_id, tags=tags))


@router.post(
    "/{note_id}/summary",
    response_model=ApiResponse[SummaryResponse],
    status_code=201,
    summary="Generate a summary",
    description="Summarize the note with the text-generation API and store the result.",
)
async def generate_note_summary(
    note_id: str,
    owner_id: OwnerId,
    service: AiService = Depends(_ai_service),
) -> ApiResponse[SummaryResponse]:
    """Generate and store a summary."""
    summary = unwrap(await service.generate_note_summary(owner_id, note_id))
    return ApiResponse(data=SummaryResponse.model_validate(summary))


@router.get(
    "/{note_id}/summary",
    response_model=ApiResponse[SummaryResponse | None],
    summary="Get the latest summary",
)
async def get_note_summary(
    note_id: str,
    owner_id: OwnerId,
    service: AiService = Depends(_ai_service),
) -> ApiResponse[SummaryResponse | None]:
    """Get the most recent summary, or null when none exists."""
    summary = unwrap(await service.get_note_summary(owner_id, note_id))
    data = SummaryResponse.model_validate(summary) if summary is not None else None
    return ApiResponse(data=data)


@router.post(
    "/{note_id}/tags/generate",
    response_model=ApiResponse[NoteTagsResponse],
    summary="Generate tags",
    description="Ask the text-generation API for tags and replace the note's tags with them.",
)
async def generate_note_tags(
    note_id: str,
    owner_id: OwnerId,
    service: AiService = Depends(_ai_service),
) -> ApiResponse[NoteTagsResponse]:
    """Generate and store tags."""
    tags = unwrap(await service.generate_note_tags(owner_id, note_id))
    return ApiResponse(data=NoteTagsResponse(note_id=note_id, tags=tags))
