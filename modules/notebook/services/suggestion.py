"""
Suggestion Service.

Search-as-you-type helpers: ranked note suggestions for a partial query,
word completions drawn from the owner's own notes, and popular tags.

Suggestions are best effort. Apart from a missing owner, a failure is
logged and reported as an empty list so the search box keeps working.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.config_schema import SearchSchema
from modules.notebook.core.result import Result
from modules.notebook.core.text import calculate_similarity, tokenize, truncate_text
from modules.notebook.core.utils import days_between, utc_now
from modules.notebook.models.note import Note
from modules.notebook.repositories.note import NoteRepository
from modules.notebook.repositories.query import NoteQuery
from modules.notebook.repositories.tag import TagRepository
from modules.notebook.schemas.search import SearchSuggestion, TagCount
from modules.notebook.services.base import BaseService


class SuggestionService(BaseService):
    """Service for query suggestions and completions."""

    def __init__(self, session: AsyncSession, config: SearchSchema | None = None) -> None:
        super().__init__(session)
        self.config = config or SearchSchema()
        self.notes = NoteRepository(session)
        self.tags = TagRepository(session)

    async def suggest_for_query(
        self,
        owner_id: str | None,
        partial_query: str,
        limit: int | None = None,
    ) -> Result[list[SearchSuggestion]]:
        """
        Notes matching a partial query, best match first.

        Queries shorter than the minimum length yield no suggestions and
        never touch the database.
        """
        return await self._run_advisory(
            "suggest_for_query",
            self._suggest_for_query(owner_id, partial_query, limit),
            empty=[],
            owner_id=owner_id,
        )

    async def _suggest_for_query(
        self,
        owner_id: str | None,
        partial_query: str,
        limit: int | None,
    ) -> list[SearchSuggestion]:
        owner = self._require_owner(owner_id)
        term = (partial_query or "").strip()
        if len(term) < self.config.min_query_length:
            return []

        query = NoteQuery(owner).matching(term)
        notes = await self.notes.find(query, limit=limit or self.config.suggestion_limit)

        now = utc_now()
        suggestions = [
            SearchSuggestion(
                id=note.id,
                title=note.title,
                content_preview=truncate_text(note.content, self.config.preview_length),
                relevance_score=self.relevance_score(note, term, now),
                created_at=note.created_at,
            )
            for note in notes
        ]
        # sorted() is stable, so equal scores keep the fetch order
        return sorted(suggestions, key=lambda s: s.relevance_score, reverse=True)

    def relevance_score(self, note: Note, term: str, now: datetime | None = None) -> int:
        """
        Score a note against a query term.

        Title match and content match each add a fixed bonus; notes created
        within the recency window earn one extra point per day left in it.
        """
        needle = term.lower()
        score = 0
        if needle in note.title.lower():
            score += self.config.title_match_score
        if needle in note.content.lower():
            score += self.config.content_match_score

        age_days = days_between(note.created_at, now or utc_now())
        score += max(0, self.config.recency_window_days - age_days)
        return score

    async def suggest_query_completions(
        self,
        owner_id: str | None,
        partial_query: str,
    ) -> Result[list[str]]:
        """
        Words from the owner's notes that extend a partial query.

        Candidates contain the partial query but are not equal to it, and
        are ranked by similarity to it.
        """
        return await self._run_advisory(
            "suggest_query_completions",
            self._suggest_query_completions(owner_id, partial_query),
            empty=[],
            owner_id=owner_id,
        )

    async def _suggest_query_completions(
        self,
        owner_id: str | None,
        partial_query: str,
    ) -> list[str]:
        owner = self._require_owner(owner_id)
        term = (partial_query or "").strip().lower()
        if len(term) < self.config.min_query_length:
            return []

        texts = await self.notes.list_text(owner, limit=self.config.completion_note_limit)

        candidates: dict[str, None] = {}
        for title, content in texts:
            for token in tokenize(f"{title} {content}"):
                if len(token) >= self.config.min_token_length and term in token and token != term:
                    candidates.setdefault(token)

        ranked = sorted(
            candidates,
            key=lambda token: calculate_similarity(term, token),
            reverse=True,
        )
        return ranked[: self.config.completion_limit]

    async def popular_tags(
        self,
        owner_id: str | None,
        limit: int | None = None,
    ) -> Result[list[TagCount]]:
        """The owner's most used tags, for the search box tag picker."""
        return await self._run_advisory(
            "popular_tags",
            self._popular_tags(owner_id, limit),
            empty=[],
            owner_id=owner_id,
        )

    async def _popular_tags(self, owner_id: str | None, limit: int | None) -> list[TagCount]:
        owner = self._require_owner(owner_id)
        counts = await self.tags.counts(owner, limit=limit or self.config.popular_tags_limit)
        return [TagCount(tag=tag, count=count) for tag, count in counts]
