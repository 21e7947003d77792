"""
Tag Service.

Per-owner tag listings and statistics, plus tag maintenance on a single
note (full replacement after generation, removal of one tag).
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.config_schema import SearchSchema
from modules.notebook.core.result import Result
from modules.notebook.core.text import normalize_tag, normalize_tags
from modules.notebook.repositories.note import NoteRepository
from modules.notebook.repositories.tag import TagRepository
from modules.notebook.schemas.search import TagCount
from modules.notebook.services.base import BaseService


class TagService(BaseService):
    """Service for tag aggregation and maintenance."""

    def __init__(self, session: AsyncSession, config: SearchSchema | None = None) -> None:
        super().__init__(session)
        self.config = config or SearchSchema()
        self.notes = NoteRepository(session)
        self.repo = TagRepository(session)

    async def user_tags(self, owner_id: str | None) -> Result[list[str]]:
        """Every distinct tag on the owner's active notes, alphabetically."""
        return await self._run(
            "user_tags",
            self._user_tags(owner_id),
            failure_message="Failed to load tags",
        )

    async def _user_tags(self, owner_id: str | None) -> list[str]:
        owner = self._require_owner(owner_id)
        return await self.repo.distinct(owner)

    async def popular_tags(
        self,
        owner_id: str | None,
        limit: int | None = None,
    ) -> Result[list[TagCount]]:
        """The owner's most used tags, top `limit` (5 by default)."""
        return await self._run(
            "popular_tags",
            self._tag_stats(owner_id, limit or self.config.popular_tags_limit),
            failure_message="Failed to load popular tags",
        )

    async def tag_stats(self, owner_id: str | None) -> Result[list[TagCount]]:
        """
        Usage count of every tag on the owner's active notes.

        Most used first; order among equal counts is not defined.
        """
        return await self._run(
            "tag_stats",
            self._tag_stats(owner_id),
            failure_message="Failed to load tag statistics",
        )

    async def _tag_stats(self, owner_id: str | None, limit: int | None = None) -> list[TagCount]:
        owner = self._require_owner(owner_id)
        counts = await self.repo.counts(owner, limit=limit)
        return [TagCount(tag=tag, count=count) for tag, count in counts]

    async def get_note_tags(self, owner_id: str | None, note_id: str) -> Result[list[str]]:
        """Tags of one of the owner's active notes."""
        return await self._run(
            "get_note_tags",
            self._get_note_tags(owner_id, note_id),
            failure_message="Failed to load tags",
            note_id=note_id,
        )

    async def _get_note_tags(self, owner_id: str | None, note_id: str) -> list[str]:
        owner = self._require_owner(owner_id)
        note = await self.notes.get_owned(owner, note_id)
        return await self.repo.list_for_note(note.id)

    async def replace_tags(
        self,
        owner_id: str | None,
        note_id: str,
        raw_tags: Iterable[str],
    ) -> Result[list[str]]:
        """
        Replace every tag of a note with a normalized batch.

        Tags are lower-cased, stripped of disallowed characters, capped in
        length, and the batch is capped in size. Returns the stored tags.
        """
        return await self._run(
            "replace_tags",
            self._replace_tags(owner_id, note_id, raw_tags),
            failure_message="Failed to save tags",
            note_id=note_id,
        )

    async def _replace_tags(
        self,
        owner_id: str | None,
        note_id: str,
        raw_tags: Iterable[str],
    ) -> list[str]:
        owner = self._require_owner(owner_id)
        tags = normalize_tags(
            raw_tags,
            max_length=self.config.tags.max_length,
            max_count=self.config.tags.max_per_batch,
        )
        note = await self.notes.get_owned(owner, note_id)

        self._log_operation("Replacing note tags", note_id=note_id, tags=tags)
        return await self._execute_db_operation(
            "replace_tags",
            self.repo.replace(note.id, tags),
        )

    async def delete_tag(self, owner_id: str | None, note_id: str, tag: str) -> Result[list[str]]:
        """Remove one tag from a note. Returns the remaining tags."""
        return await self._run(
            "delete_tag",
            self._delete_tag(owner_id, note_id, tag),
            failure_message="Failed to delete tag",
            note_id=note_id,
        )

    async def _delete_tag(self, owner_id: str | None, note_id: str, tag: str) -> list[str]:
        owner = self._require_owner(owner_id)
        self._validate_required({"tag": tag}, ["tag"])
        note = await self.notes.get_owned(owner, note_id)

        removed = await self._execute_db_operation(
            "delete_tag",
            self.repo.delete(note.id, normalize_tag(tag, self.config.tags.max_length)),
        )
        self._log_operation("Deleted note tag", note_id=note_id, tag=tag, removed=removed)
        return await self.repo.list_for_note(note.id)
