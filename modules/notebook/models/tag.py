"""
Note Tag Model.

One row per tag attached to a note. Tag text is stored normalized
(see core/text.normalize_tag). Duplicates on one note are allowed.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modules.notebook.models.base import Base, CreatedAtMixin, UUIDMixin

if TYPE_CHECKING:
    from modules.notebook.models.note import Note


class NoteTag(UUIDMixin, CreatedAtMixin, Base):
    """Tag attached to a single note."""

    __tablename__ = "note_tags"

    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )

    note: Mapped["Note"] = relationship(back_populates="tags")

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag={self.tag!r})>"
