"""
Note Service.

Business logic layer for notes: create, read, edit, soft delete,
restore, listing and the trash view. Every operation is scoped to the
requesting owner and returns a Result.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.pagination import total_pages
from modules.notebook.core.result import Result
from modules.notebook.models.note import Note
from modules.notebook.repositories.note import NoteRepository
from modules.notebook.schemas.note import NoteCreate, NoteListResponse, NotePage, NoteUpdate
from modules.notebook.services.base import BaseService

TITLE_MAX_LENGTH = 255


class NoteService(BaseService):
    """
    Service for note business logic.

    Missing notes and notes of other owners produce the same
    not-found result.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, owner_id: str | None, data: NoteCreate) -> Result[Note]:
        """
        Create a new note.

        Args:
            owner_id: Authenticated owner
            data: Note creation data

        Returns:
            Ok(created note) or Err
        """
        return await self._run(
            "create_note",
            self._create_note(owner_id, data),
            failure_message="Failed to create note",
            owner_id=owner_id,
        )

    async def _create_note(self, owner_id: str | None, data: NoteCreate) -> Note:
        owner = self._require_owner(owner_id)
        self._validate_required(data.model_dump(), ["title", "content"])
        self._validate_string_length(data.title, "title", min_length=1, max_length=TITLE_MAX_LENGTH)

        self._log_operation("Creating note", owner_id=owner, title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                user_id=owner,
                title=data.title,
                content=data.content,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, owner_id: str | None, note_id: str) -> Result[Note]:
        """Get one of the owner's active notes by ID."""
        return await self._run(
            "get_note",
            self._get_note(owner_id, note_id),
            failure_message="Failed to load note",
            note_id=note_id,
        )

    async def _get_note(self, owner_id: str | None, note_id: str) -> Note:
        owner = self._require_owner(owner_id)
        return await self.repo.get_owned(owner, note_id)

    async def list_notes(
        self,
        owner_id: str | None,
        page: int = 1,
        page_size: int = 20,
    ) -> Result[NotePage]:
        """
        List the owner's active notes, newest first, one page at a time.

        Args:
            owner_id: Authenticated owner
            page: 1-based page number
            page_size: Notes per page
        """
        return await self._run(
            "list_notes",
            self._list_notes(owner_id, page, page_size),
            failure_message="Failed to load notes",
            page=page,
        )

    async def _list_notes(self, owner_id: str | None, page: int, page_size: int) -> NotePage:
        owner = self._require_owner(owner_id)
        page = max(page, 1)
        offset = (page - 1) * page_size

        notes = await self.repo.list_active(owner, limit=page_size, offset=offset)
        total = await self.repo.count_active(owner)

        return NotePage(
            notes=[NoteListResponse.model_validate(note) for note in notes],
            total=total,
            total_pages=total_pages(total, page_size),
            current_page=page,
            page_size=page_size,
        )

    async def list_deleted_notes(self, owner_id: str | None, limit: int = 50) -> Result[list[Note]]:
        """List the owner's soft-deleted notes (the trash)."""
        return await self._run(
            "list_deleted_notes",
            self._list_deleted_notes(owner_id, limit),
            failure_message="Failed to load deleted notes",
        )

    async def _list_deleted_notes(self, owner_id: str | None, limit: int) -> list[Note]:
        owner = self._require_owner(owner_id)
        return await self.repo.list_deleted(owner, limit=limit)

    async def update_note(
        self,
        owner_id: str | None,
        note_id: str,
        data: NoteUpdate,
    ) -> Result[Note]:
        """
        Update title and/or content of an active note.

        Only fields explicitly set on data are changed.
        """
        return await self._run(
            "update_note",
            self._update_note(owner_id, note_id, data),
            failure_message="Failed to update note",
            note_id=note_id,
        )

    async def _update_note(self, owner_id: str | None, note_id: str, data: NoteUpdate) -> Note:
        owner = self._require_owner(owner_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        self._validate_required(update_data, list(update_data.keys()))

        note = await self.repo.get_owned(owner, note_id)
        if not update_data:
            return note

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note, **update_data),
        )

    async def delete_note(self, owner_id: str | None, note_id: str) -> Result[Note]:
        """Soft-delete an active note."""
        return await self._run(
            "delete_note",
            self._delete_note(owner_id, note_id),
            failure_message="Failed to delete note",
            note_id=note_id,
        )

    async def _delete_note(self, owner_id: str | None, note_id: str) -> Note:
        owner = self._require_owner(owner_id)
        note = await self.repo.get_owned(owner, note_id)

        self._log_operation("Deleting note", note_id=note_id)
        return await self._execute_db_operation("delete_note", self.repo.soft_delete(note))

    async def restore_note(self, owner_id: str | None, note_id: str) -> Result[Note]:
        """Restore a soft-deleted note. Title and content are untouched."""
        return await self._run(
            "restore_note",
            self._restore_note(owner_id, note_id),
            failure_message="Failed to restore note",
            note_id=note_id,
        )

    async def _restore_note(self, owner_id: str | None, note_id: str) -> Note:
        owner = self._require_owner(owner_id)
        note = await self.repo.get_owned(owner, note_id, deleted=True)

        self._log_operation("Restoring note", note_id=note_id)
        return await self._execute_db_operation("restore_note", self.repo.restore(note))
