"""
Note Query Builder.

Composable predicates for reading a single owner's active notes.

The base predicate is always applied:

    user_id = :owner AND deleted_at IS NULL

and can be narrowed, in any combination, by:

    matching(text)      - case-insensitive substring of title OR content
    within(start, end)  - created_at inside [start of day, end of day]
    tagged(tags)        - note carries EVERY requested tag

Usage:
    query = NoteQuery(owner_id).matching("python").tagged(["web", "api"])
    result = await session.execute(query.statement(limit=20))
    notes = list(result.scalars().all())

Invalid input raises ValidationError before any statement is built.
"""

from collections.abc import Iterable
from datetime import date, datetime

from sqlalchemy import ColumnElement, Select, func, or_, select

from modules.notebook.core.exceptions import ValidationError
from modules.notebook.core.utils import end_of_day, start_of_day
from modules.notebook.models.note import Note
from modules.notebook.models.tag import NoteTag


def validate_date_range(
    start: date | datetime | None,
    end: date | datetime | None,
) -> tuple[datetime, datetime]:
    """
    Normalize a date range to whole days.

    Returns:
        (start floored to 00:00:00.000000, end ceiled to 23:59:59.999999)

    Raises:
        ValidationError: If a bound is missing or start is after end
    """
    if start is None or end is None:
        raise ValidationError(
            "Start and end dates are required",
            details={"start": start is None, "end": end is None},
        )

    range_start = start_of_day(start)
    range_end = end_of_day(end)
    if range_start > range_end:
        raise ValidationError(
            "Start date must be before end date",
            details={"start": range_start.isoformat(), "end": range_end.isoformat()},
        )
    return range_start, range_end


class NoteQuery:
    """Owner-scoped predicate over active notes."""

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        self.text: str | None = None
        self.date_range: tuple[datetime, datetime] | None = None
        self.required_tags: list[str] = []
        self._conditions: list[ColumnElement[bool]] = [
            Note.user_id == owner_id,
            Note.deleted_at.is_(None),
        ]

    def matching(self, text: str | None) -> "NoteQuery":
        """Narrow to notes whose title or content contains text (any case)."""
        term = (text or "").strip()
        if not term:
            raise ValidationError("Search query is required", details={"query": "required"})

        self.text = term
        self._conditions.append(
            or_(
                Note.title.icontains(term, autoescape=True),
                Note.content.icontains(term, autoescape=True),
            )
        )
        return self

    def within(
        self,
        start: date | datetime | None,
        end: date | datetime | None,
    ) -> "NoteQuery":
        """Narrow to notes created between the start and end days, inclusive."""
        range_start, range_end = validate_date_range(start, end)
        self.date_range = (range_start, range_end)
        self._conditions.append(Note.created_at >= range_start)
        self._conditions.append(Note.created_at <= range_end)
        return self

    def tagged(self, tags: Iterable[str]) -> "NoteQuery":
        """
        Narrow to notes carrying every tag in tags.

        A join on `tag IN (...)` alone would match notes with ANY of the
        tags, so matches are grouped per note and only notes that matched
        each distinct requested tag are kept.
        """
        required = list(dict.fromkeys(tag for tag in tags if tag))
        if not required:
            raise ValidationError("At least one tag is required", details={"tags": "required"})

        self.required_tags = required
        self._conditions.append(Note.id.in_(self.tag_match_subquery()))
        return self

    def tag_match_subquery(self) -> Select:
        """Note ids whose tags cover every required tag."""
        return (
            select(NoteTag.note_id)
            .where(NoteTag.tag.in_(self.required_tags))
            .group_by(NoteTag.note_id)
            .having(func.count(NoteTag.tag.distinct()) == len(self.required_tags))
        )

    @property
    def conditions(self) -> list[ColumnElement[bool]]:
        """Every predicate accumulated so far."""
        return list(self._conditions)

    def statement(self, limit: int | None = None) -> Select:
        """SELECT notes matching every predicate, most recently updated first."""
        stmt = select(Note).where(*self._conditions).order_by(Note.updated_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def count_statement(self) -> Select:
        """SELECT COUNT(*) of notes matching every predicate."""
        return select(func.count()).select_from(Note).where(*self._conditions)
