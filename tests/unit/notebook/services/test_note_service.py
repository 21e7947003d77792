"""
Unit Tests for Note Service.

Tests the NoteService business logic with mocked repositories.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from modules.notebook.core.exceptions import NotFoundError
from modules.notebook.core.result import ErrorKind
from modules.notebook.schemas.note import NoteCreate, NoteUpdate
from modules.notebook.services.note import NoteService


def _note(**overrides) -> MagicMock:
    note = MagicMock()
    note.id = overrides.get("id", "note-123")
    note.title = overrides.get("title", "Test Note")
    note.content = overrides.get("content", "Test content")
    note.created_at = datetime(2024, 1, 1)
    note.updated_at = datetime(2024, 1, 1)
    note.deleted_at = overrides.get("deleted_at")
    return note


@pytest.fixture
def service():
    """Create NoteService with mocked session."""
    return NoteService(AsyncMock())


class TestNoteServiceCreate:
    """Tests for note creation."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, service):
        with patch.object(service.repo, "create", return_value=_note()) as mock_create:
            data = NoteCreate(title="Test Note", content="Test content")
            result = await service.create_note("user-1", data)

        mock_create.assert_called_once_with(
            user_id="user-1",
            title="Test Note",
            content="Test content",
        )
        assert result.is_ok
        assert result.value.id == "note-123"

    @pytest.mark.asyncio
    async def test_create_without_owner_never_touches_repository(self, service):
        with patch.object(service.repo, "create") as mock_create:
            result = await service.create_note(None, NoteCreate(title="T", content="C"))

        assert result.kind == ErrorKind.UNAUTHORIZED
        mock_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_blank_title_rejected(self, service):
        data = NoteCreate.model_construct(title="   ", content="body")
        with patch.object(service.repo, "create") as mock_create:
            result = await service.create_note("user-1", data)

        assert result.kind == ErrorKind.VALIDATION
        mock_create.assert_not_called()


class TestNoteServiceGet:
    """Tests for getting notes."""

    @pytest.mark.asyncio
    async def test_get_note_success(self, service):
        with patch.object(service.repo, "get_owned", return_value=_note()) as mock_get:
            result = await service.get_note("user-1", "note-123")

        mock_get.assert_called_once_with("user-1", "note-123")
        assert result.value.title == "Test Note"

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, service):
        with patch.object(
            service.repo,
            "get_owned",
            side_effect=NotFoundError("Note not found or permission denied"),
        ):
            result = await service.get_note("user-1", "missing")

        assert result.kind == ErrorKind.NOT_FOUND
        assert result.message == "Note not found or permission denied"

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_internal(self, service):
        with patch.object(service.repo, "get_owned", side_effect=RuntimeError("db gone")):
            result = await service.get_note("user-1", "note-123")

        assert result.kind == ErrorKind.INTERNAL
        assert result.message == "Failed to load note"


class TestNoteServiceList:
    """Tests for listing notes."""

    @pytest.mark.asyncio
    async def test_list_notes_first_page(self, service):
        notes = [_note(id=f"n{i}") for i in range(20)]
        with patch.object(service.repo, "list_active", return_value=notes) as mock_list, \
             patch.object(service.repo, "count_active", return_value=45):
            result = await service.list_notes("user-1")

        mock_list.assert_called_once_with("user-1", limit=20, offset=0)
        page = result.value
        assert len(page.notes) == 20
        assert page.total == 45
        assert page.total_pages == 3
        assert page.current_page == 1

    @pytest.mark.asyncio
    async def test_list_notes_offset_for_later_page(self, service):
        with patch.object(service.repo, "list_active", return_value=[]) as mock_list, \
             patch.object(service.repo, "count_active", return_value=0):
            result = await service.list_notes("user-1", page=3, page_size=10)

        mock_list.assert_called_once_with("user-1", limit=10, offset=20)
        assert result.value.total_pages == 0

    @pytest.mark.asyncio
    async def test_list_deleted_notes(self, service):
        deleted = [_note(deleted_at=datetime(2024, 2, 1))]
        with patch.object(service.repo, "list_deleted", return_value=deleted) as mock_list:
            result = await service.list_deleted_notes("user-1")

        mock_list.assert_called_once_with("user-1", limit=50)
        assert result.value == deleted


class TestNoteServiceUpdate:
    """Tests for updating notes."""

    @pytest.mark.asyncio
    async def test_update_only_set_fields(self, service):
        note = _note()
        with patch.object(service.repo, "get_owned", return_value=note), \
             patch.object(service.repo, "update", return_value=note) as mock_update:
            result = await service.update_note("user-1", "note-123", NoteUpdate(title="New"))

        mock_update.assert_called_once_with(note, title="New")
        assert result.is_ok

    @pytest.mark.asyncio
    async def test_empty_update_returns_note_unchanged(self, service):
        note = _note()
        with patch.object(service.repo, "get_owned", return_value=note), \
             patch.object(service.repo, "update") as mock_update:
            result = await service.update_note("user-1", "note-123", NoteUpdate())

        mock_update.assert_not_called()
        assert result.value is note


class TestNoteServiceDeleteRestore:
    """Tests for soft delete and restore."""

    @pytest.mark.asyncio
    async def test_delete_is_soft(self, service):
        note = _note()
        with patch.object(service.repo, "get_owned", return_value=note) as mock_get, \
             patch.object(service.repo, "soft_delete", return_value=note) as mock_delete:
            result = await service.delete_note("user-1", "note-123")

        mock_get.assert_called_once_with("user-1", "note-123")
        mock_delete.assert_called_once_with(note)
        assert result.is_ok

    @pytest.mark.asyncio
    async def test_restore_looks_in_trash(self, service):
        note = _note(deleted_at=datetime(2024, 2, 1))
        with patch.object(service.repo, "get_owned", return_value=note) as mock_get, \
             patch.object(service.repo, "restore", return_value=note) as mock_restore:
            result = await service.restore_note("user-1", "note-123")

        mock_get.assert_called_once_with("user-1", "note-123", deleted=True)
        mock_restore.assert_called_once_with(note)
        assert result.is_ok
