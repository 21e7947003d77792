"""
Unit Tests for the Note Query Builder.

Checks validation and the composed statement without a database.
"""

from datetime import date, datetime

import pytest

from modules.notebook.core.exceptions import ValidationError
from modules.notebook.repositories.query import NoteQuery, validate_date_range


def _sql(statement) -> str:
    return str(statement.compile(compile_kwargs={"literal_binds": True}))


class TestValidateDateRange:
    def test_floors_and_ceils_whole_days(self):
        start, end = validate_date_range(date(2024, 1, 1), date(2024, 1, 31))
        assert start == datetime(2024, 1, 1, 0, 0, 0)
        assert end == datetime(2024, 1, 31, 23, 59, 59, 999999)

    def test_same_day_is_valid(self):
        start, end = validate_date_range(date(2024, 1, 1), date(2024, 1, 1))
        assert start < end

    def test_time_of_day_is_ignored(self):
        start, end = validate_date_range(datetime(2024, 1, 1, 18), datetime(2024, 1, 1, 6))
        assert (start, end) == (
            datetime(2024, 1, 1),
            datetime(2024, 1, 1, 23, 59, 59, 999999),
        )

    def test_start_after_end_rejected(self):
        with pytest.raises(ValidationError, match="Start date must be before end date"):
            validate_date_range(date(2024, 2, 1), date(2024, 1, 1))

    @pytest.mark.parametrize(
        ("start", "end"),
        [(None, date(2024, 1, 1)), (date(2024, 1, 1), None), (None, None)],
    )
    def test_missing_bound_rejected(self, start, end):
        with pytest.raises(ValidationError, match="Start and end dates are required"):
            validate_date_range(start, end)


class TestNoteQuery:
    def test_base_conditions_scope_owner_and_active(self):
        sql = _sql(NoteQuery("owner-a").statement())
        assert "notes.user_id = 'owner-a'" in sql
        assert "notes.deleted_at IS NULL" in sql
        assert "ORDER BY notes.updated_at DESC" in sql

    def test_matching_strips_and_records_text(self):
        query = NoteQuery("owner-a").matching("  python  ")
        assert query.text == "python"
        assert len(query.conditions) == 3

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_matching_rejects_empty_text(self, text):
        with pytest.raises(ValidationError, match="Search query is required"):
            NoteQuery("owner-a").matching(text)

    def test_tagged_deduplicates(self):
        query = NoteQuery("owner-a").tagged(["web", "api", "web"])
        assert query.required_tags == ["web", "api"]

    def test_tagged_rejects_empty_list(self):
        with pytest.raises(ValidationError, match="At least one tag is required"):
            NoteQuery("owner-a").tagged([])

    def test_tag_subquery_requires_every_tag(self):
        query = NoteQuery("owner-a").tagged(["web", "api"])
        sql = _sql(query.tag_match_subquery())
        assert "GROUP BY note_tags.note_id" in sql
        assert "HAVING count(DISTINCT note_tags.tag) = 2" in sql

    def test_within_records_range(self):
        query = NoteQuery("owner-a").within(date(2024, 1, 1), date(2024, 1, 2))
        assert query.date_range == (
            datetime(2024, 1, 1),
            datetime(2024, 1, 2, 23, 59, 59, 999999),
        )

    def test_statement_applies_limit(self):
        sql = _sql(NoteQuery("owner-a").statement(limit=7))
        assert "LIMIT 7" in sql

    def test_predicates_combine(self):
        query = (
            NoteQuery("owner-a")
            .matching("py")
            .tagged(["web"])
            .within(date(2024, 1, 1), date(2024, 1, 2))
        )
        # owner, active, text, tags, start, end
        assert len(query.conditions) == 6
