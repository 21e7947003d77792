"""
Note Repository.

Data access layer for notes. Every method takes the owner id and scopes
its statement to that owner; there is no unscoped read.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.exceptions import NotFoundError
from modules.notebook.core.utils import utc_now
from modules.notebook.models.note import Note
from modules.notebook.repositories.base import BaseRepository
from modules.notebook.repositories.query import NoteQuery


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Not-found and owned-by-someone-else are reported the same way.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_owned(
        self,
        owner_id: str,
        note_id: str,
        deleted: bool = False,
    ) -> Note:
        """
        Get an owner's note by ID.

        Args:
            owner_id: Requesting owner
            note_id: Note ID
            deleted: Look for a soft-deleted note instead of an active one

        Raises:
            NotFoundError: If no matching note belongs to the owner
        """
        deleted_clause = Note.deleted_at.is_not(None) if deleted else Note.deleted_at.is_(None)
        result = await self.session.execute(
            select(Note)
            .where(Note.id == str(note_id))
            .where(Note.user_id == owner_id)
            .where(deleted_clause)
        )
        note = result.scalar_one_or_none()

        if note is None:
            raise NotFoundError("Note not found or permission denied")

        return note

    async def find(self, query: NoteQuery, limit: int | None = None) -> list[Note]:
        """Run a composed query, most recently updated first."""
        result = await self.session.execute(query.statement(limit=limit))
        return list(result.scalars().all())

    async def list_active(
        self,
        owner_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Note]:
        """
        Get an owner's active notes, newest first.

        Args:
            owner_id: Requesting owner
            limit: Maximum number of notes to return
            offset: Number of notes to skip
        """
        result = await self.session.execute(
            select(Note)
            .where(*NoteQuery(owner_id).conditions)
            .order_by(Note.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_active(self, owner_id: str) -> int:
        """Get count of an owner's active notes."""
        result = await self.session.execute(NoteQuery(owner_id).count_statement())
        return result.scalar_one()

    async def list_deleted(self, owner_id: str, limit: int = 50) -> list[Note]:
        """Get an owner's soft-deleted notes, most recently deleted first."""
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == owner_id)
            .where(Note.deleted_at.is_not(None))
            .order_by(Note.deleted_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_text(self, owner_id: str, limit: int = 50) -> list[tuple[str, str]]:
        """Get (title, content) pairs of an owner's active notes."""
        result = await self.session.execute(
            select(Note.title, Note.content)
            .where(*NoteQuery(owner_id).conditions)
            .limit(limit)
        )
        return [(title, content) for title, content in result.all()]

    async def soft_delete(self, note: Note) -> Note:
        """Mark a note deleted without removing the row."""
        return await self.update(note, deleted_at=utc_now())

    async def restore(self, note: Note) -> Note:
        """Clear the deletion marker of a note."""
        return await self.update(note, deleted_at=None)
