"""
Summary Model.

AI-generated summaries of a note, newest first.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modules.notebook.models.base import Base, CreatedAtMixin, UUIDMixin

if TYPE_CHECKING:
    from modules.notebook.models.note import Note


class Summary(UUIDMixin, CreatedAtMixin, Base):
    """Summary generated for a note by the text-generation API."""

    __tablename__ = "summaries"

    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    model: Mapped[str] = mapped_column(String(64), nullable=False)

    note: Mapped["Note"] = relationship(back_populates="summaries")

    def __repr__(self) -> str:
        return f"<Summary(id={self.id}, note_id={self.note_id})>"
