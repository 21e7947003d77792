"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["JavaScript 프로그래밍"],
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Note content",
        examples=["Closures, promises and the event loop."],
    )


class NoteUpdate(BaseModel):
    """Schema for updating an existing note. Only provided fields change."""

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        min_length=1,
        description="Note content",
    )


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
    deleted_at: datetime | None = Field(default=None, description="Soft-deletion timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteListResponse(BaseModel):
    """Schema for listing notes."""

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotePage(BaseModel):
    """One page of an owner's active notes."""

    notes: list[NoteListResponse]
    total: int
    total_pages: int
    current_page: int
    page_size: int


class SummaryResponse(BaseModel):
    """AI-generated summary of a note."""

    id: str
    note_id: str
    content: str
    model: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteTagsResponse(BaseModel):
    """Tags attached to a note."""

    note_id: str
    tags: list[str]
