"""
Summary Repository.

Data access for AI-generated note summaries.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.models.summary import Summary
from modules.notebook.repositories.base import BaseRepository


class SummaryRepository(BaseRepository[Summary]):
    """Repository for Summary model."""

    model = Summary

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def latest(self, note_id: str) -> Summary | None:
        """Most recent summary of a note, if any."""
        result = await self.session.execute(
            select(Summary)
            .where(Summary.note_id == note_id)
            .order_by(Summary.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
