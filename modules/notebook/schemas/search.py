"""
Search Schemas.

Result shapes of the search, suggestion and tag operations.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from modules.notebook.core.utils import utc_now


class SearchHit(BaseModel):
    """A note returned by a search or filter, with its tags."""

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class SearchMetadata(BaseModel):
    """
    Informational measurements of one search call.

    Never used for correctness.
    """

    query: str | None = None
    tags: list[str] = Field(default_factory=list)
    start_date: date | None = None
    end_date: date | None = None
    result_count: int
    elapsed_ms: int
    timestamp: datetime = Field(default_factory=utc_now)


class SearchResults(BaseModel):
    """Notes found by a search or filter plus metadata."""

    notes: list[SearchHit]
    metadata: SearchMetadata


class SearchSuggestion(BaseModel):
    """A note proposed as an autocomplete candidate."""

    id: str
    title: str
    content_preview: str
    relevance_score: int
    created_at: datetime


class TagCount(BaseModel):
    """A tag and how many times it is used."""

    tag: str
    count: int
