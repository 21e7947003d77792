"""
Search Service.

Free-text search, AND-tag filtering and date-range filtering over the
requesting owner's active notes. Each filter is built from NoteQuery so
the narrowing predicates can be combined freely; results are always
ordered by most recently updated first and capped at the limit.
"""

from collections.abc import Iterable
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.config_schema import SearchSchema
from modules.notebook.core.exceptions import ValidationError
from modules.notebook.core.result import Result
from modules.notebook.core.text import normalize_tags
from modules.notebook.core.utils import elapsed_ms, utc_now
from modules.notebook.models.note import Note
from modules.notebook.repositories.note import NoteRepository
from modules.notebook.repositories.query import NoteQuery
from modules.notebook.repositories.tag import TagRepository
from modules.notebook.schemas.search import SearchHit, SearchMetadata, SearchResults
from modules.notebook.services.base import BaseService


class SearchService(BaseService):
    """Service for searching and filtering notes."""

    def __init__(self, session: AsyncSession, config: SearchSchema | None = None) -> None:
        super().__init__(session)
        self.config = config or SearchSchema()
        self.notes = NoteRepository(session)
        self.tags = TagRepository(session)

    async def search_by_text(
        self,
        owner_id: str | None,
        query: str,
        limit: int | None = None,
    ) -> Result[SearchResults]:
        """
        Find active notes whose title or content contains query.

        Matching is case-insensitive. An empty or whitespace-only query
        is rejected; a query with no matches yields an empty list.
        """
        return await self._run(
            "search_by_text",
            self._search(owner_id, limit, text=query, text_required=True),
            failure_message="Search failed",
            owner_id=owner_id,
        )

    async def filter_by_tags(
        self,
        owner_id: str | None,
        tags: Iterable[str],
        search_query: str | None = None,
        limit: int | None = None,
    ) -> Result[SearchResults]:
        """
        Find active notes carrying every one of tags.

        Optionally narrowed further by a text query.
        """
        return await self._run(
            "filter_by_tags",
            self._search(owner_id, limit, text=search_query, tags=tags, tags_required=True),
            failure_message="Tag filtering failed",
            owner_id=owner_id,
        )

    async def filter_by_date_range(
        self,
        owner_id: str | None,
        start: date | datetime | None,
        end: date | datetime | None,
        search_query: str | None = None,
        tags: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> Result[SearchResults]:
        """
        Find active notes created between start and end (whole days).

        Optionally narrowed by a text query and/or required tags.
        Fails when a bound is missing or start is after end.
        """
        return await self._run(
            "filter_by_date_range",
            self._search(
                owner_id,
                limit,
                text=search_query,
                tags=tags,
                date_range=(start, end),
            ),
            failure_message="Date filtering failed",
            owner_id=owner_id,
        )

    async def _search(
        self,
        owner_id: str | None,
        limit: int | None,
        text: str | None = None,
        tags: Iterable[str] | None = None,
        date_range: tuple[date | datetime | None, date | datetime | None] | None = None,
        text_required: bool = False,
        tags_required: bool = False,
    ) -> SearchResults:
        owner = self._require_owner(owner_id)
        started = utc_now()
        query = self._build_query(owner, text, tags, date_range, text_required, tags_required)
        effective_limit = limit or self.config.default_limit

        self._log_debug(
            "Searching notes",
            query=query.text,
            tags=query.required_tags,
            date_range=bool(query.date_range),
            limit=effective_limit,
        )

        notes = await self._execute_db_operation(
            "search_notes",
            self.notes.find(query, limit=effective_limit),
        )
        hits = await self._to_hits(notes)

        metadata = SearchMetadata(
            query=query.text,
            tags=query.required_tags,
            start_date=query.date_range[0].date() if query.date_range else None,
            end_date=query.date_range[1].date() if query.date_range else None,
            result_count=len(hits),
            elapsed_ms=elapsed_ms(started),
        )
        return SearchResults(notes=hits, metadata=metadata)

    def _build_query(
        self,
        owner: str,
        text: str | None,
        tags: Iterable[str] | None,
        date_range: tuple[date | datetime | None, date | datetime | None] | None,
        text_required: bool,
        tags_required: bool,
    ) -> NoteQuery:
        """Validate every input and compose the predicates, before any I/O."""
        query = NoteQuery(owner)

        if text_required or (text is not None and text.strip()):
            query.matching(text)

        if date_range is not None:
            query.within(*date_range)

        requested = list(tags or [])
        if tags_required or requested:
            normalized = normalize_tags(requested, max_length=self.config.tags.max_length)
            if not normalized:
                raise ValidationError("Select at least one tag", details={"tags": "required"})
            query.tagged(normalized)

        return query

    async def _to_hits(self, notes: list[Note]) -> list[SearchHit]:
        tag_sets = await self.tags.tag_sets([note.id for note in notes])
        return [
            SearchHit(
                id=note.id,
                title=note.title,
                content=note.content,
                created_at=note.created_at,
                updated_at=note.updated_at,
                tags=sorted(tag_sets.get(note.id, set())),
            )
            for note in notes
        ]
