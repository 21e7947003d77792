"""
Unit Tests for Search Service.

Input validation happens before any repository call.
"""

from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from modules.notebook.core.config_schema import SearchSchema
from modules.notebook.core.result import ErrorKind
from modules.notebook.services.search import SearchService


def _note(note_id: str = "n1") -> MagicMock:
    note = MagicMock()
    note.id = note_id
    note.title = "Python tips"
    note.content = "List comprehensions"
    note.created_at = datetime(2024, 1, 1)
    note.updated_at = datetime(2024, 1, 2)
    return note


@pytest.fixture
def service():
    return SearchService(AsyncMock(), SearchSchema(default_limit=20))


class TestSearchByText:
    @pytest.mark.asyncio
    async def test_returns_hits_with_tags(self, service):
        with patch.object(service.notes, "find", return_value=[_note()]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={"n1": {"web", "api"}}):
            result = await service.search_by_text("user-1", "  python ")

        query = mock_find.call_args.args[0]
        assert query.text == "python"
        assert mock_find.call_args.kwargs == {"limit": 20}
        hits = result.value.notes
        assert [hit.id for hit in hits] == ["n1"]
        assert hits[0].tags == ["api", "web"]
        assert result.value.metadata.result_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query_rejected_without_io(self, service, query):
        with patch.object(service.notes, "find") as mock_find:
            result = await service.search_by_text("user-1", query)

        assert result.kind == ErrorKind.VALIDATION
        assert result.message == "Search query is required"
        mock_find.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_owner(self, service):
        with patch.object(service.notes, "find") as mock_find:
            result = await service.search_by_text(None, "python")

        assert result.kind == ErrorKind.UNAUTHORIZED
        mock_find.assert_not_called()

    @pytest.mark.asyncio
    async def test_explicit_limit(self, service):
        with patch.object(service.notes, "find", return_value=[]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={}):
            result = await service.search_by_text("user-1", "python", limit=3)

        assert mock_find.call_args.kwargs == {"limit": 3}
        assert result.value.notes == []

    @pytest.mark.asyncio
    async def test_repository_failure_is_internal(self, service):
        with patch.object(service.notes, "find", side_effect=RuntimeError("down")):
            result = await service.search_by_text("user-1", "python")

        assert result.kind == ErrorKind.INTERNAL
        assert result.message == "Search failed"


class TestFilterByTags:
    @pytest.mark.asyncio
    async def test_tags_are_normalized(self, service):
        with patch.object(service.notes, "find", return_value=[]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={}):
            result = await service.filter_by_tags("user-1", ["Python", " WEB "])

        query = mock_find.call_args.args[0]
        assert query.required_tags == ["python", "web"]
        assert result.value.metadata.tags == ["python", "web"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tags", [[], ["!!!", "  "]])
    async def test_no_usable_tag_rejected(self, service, tags):
        with patch.object(service.notes, "find") as mock_find:
            result = await service.filter_by_tags("user-1", tags)

        assert result.kind == ErrorKind.VALIDATION
        assert result.message == "Select at least one tag"
        mock_find.assert_not_called()

    @pytest.mark.asyncio
    async def test_combined_with_text(self, service):
        with patch.object(service.notes, "find", return_value=[]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={}):
            await service.filter_by_tags("user-1", ["python"], search_query="async")

        query = mock_find.call_args.args[0]
        assert query.text == "async"
        assert query.required_tags == ["python"]

    @pytest.mark.asyncio
    async def test_blank_text_is_ignored(self, service):
        with patch.object(service.notes, "find", return_value=[]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={}):
            await service.filter_by_tags("user-1", ["python"], search_query="  ")

        assert mock_find.call_args.args[0].text is None


class TestFilterByDateRange:
    @pytest.mark.asyncio
    async def test_range_expanded_to_whole_days(self, service):
        with patch.object(service.notes, "find", return_value=[]) as mock_find, \
             patch.object(service.tags, "tag_sets", return_value={}):
            result = await service.filter_by_date_range(
                "user-1", date(2024, 1, 1), date(2024, 1, 31)
            )

        start, end = mock_find.call_args.args[0].date_range
        assert start == datetime(2024, 1, 1, 0, 0, 0)
        assert end == datetime(2024, 1, 31, 23, 59, 59, 999999)
        assert result.value.metadata.start_date == date(2024, 1, 1)
        assert result.value.metadata.end_date == date(2024, 1, 31)

    @pytest.mark.asyncio
    async def test_start_after_end_rejected(self, service):
        with patch.object(service.notes, "find") as mock_find:
            result = await service.filter_by_date_range(
                "user-1", date(2024, 2, 1), date(2024, 1, 1)
            )

        assert result.kind == ErrorKind.VALIDATION
        assert result.message == "Start date must be before end date"
        mock_find.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_bound_rejected(self, service):
        result = await service.filter_by_date_range("user-1", None, date(2024, 1, 1))
        assert result.kind == ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_same_day_allowed(self, service):
        with patch.object(service.notes, "find", return_value=[]), \
             patch.object(service.tags, "tag_sets", return_value={}):
            result = await service.filter_by_date_range(
                "user-1", date(2024, 1, 1), date(2024, 1, 1)
            )

        assert result.is_ok
