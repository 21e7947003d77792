"""
Tag Repository.

Data access for tags attached to notes, plus per-owner aggregates.
Aggregates only count tags of the owner's active notes.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.models.note import Note
from modules.notebook.models.tag import NoteTag
from modules.notebook.repositories.base import BaseRepository
from modules.notebook.repositories.query import NoteQuery


class TagRepository(BaseRepository[NoteTag]):
    """Repository for NoteTag model."""

    model = NoteTag

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_for_note(self, note_id: str) -> list[str]:
        """Get a note's tags in insertion order."""
        result = await self.session.execute(
            select(NoteTag.tag)
            .where(NoteTag.note_id == note_id)
            .order_by(NoteTag.created_at)
        )
        return list(result.scalars().all())

    async def replace(self, note_id: str, tags: list[str]) -> list[str]:
        """
        Replace every tag of a note.

        Old rows are deleted before the new batch is inserted. The two
        steps are not atomic with respect to concurrent readers.
        """
        await self.session.execute(delete(NoteTag).where(NoteTag.note_id == note_id))
        self.session.add_all([NoteTag(note_id=note_id, tag=tag) for tag in tags])
        await self.session.flush()
        return list(tags)

    async def delete(self, note_id: str, tag: str) -> int:
        """Delete every row of one tag on a note. Returns rows removed."""
        result = await self.session.execute(
            delete(NoteTag)
            .where(NoteTag.note_id == note_id)
            .where(NoteTag.tag == tag)
        )
        await self.session.flush()
        return result.rowcount or 0

    async def counts(self, owner_id: str, limit: int | None = None) -> list[tuple[str, int]]:
        """
        Tag usage counts across an owner's active notes, most used first.

        Order among equal counts is whatever the database returns.
        """
        usage = func.count(NoteTag.id).label("usage")
        stmt = (
            select(NoteTag.tag, usage)
            .join(Note, Note.id == NoteTag.note_id)
            .where(*NoteQuery(owner_id).conditions)
            .group_by(NoteTag.tag)
            .order_by(usage.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [(tag, count) for tag, count in result.all()]

    async def distinct(self, owner_id: str) -> list[str]:
        """Every distinct tag on an owner's active notes, alphabetically."""
        result = await self.session.execute(
            select(NoteTag.tag)
            .join(Note, Note.id == NoteTag.note_id)
            .where(*NoteQuery(owner_id).conditions)
            .distinct()
            .order_by(NoteTag.tag)
        )
        return list(result.scalars().all())

    async def tag_sets(self, note_ids: list[str]) -> dict[str, set[str]]:
        """Full tag set of each given note (notes without tags are omitted)."""
        if not note_ids:
            return {}
        result = await self.session.execute(
            select(NoteTag.note_id, NoteTag.tag).where(NoteTag.note_id.in_(note_ids))
        )
        tag_sets: dict[str, set[str]] = {}
        for note_id, tag in result.all():
            tag_sets.setdefault(note_id, set()).add(tag)
        return tag_sets
