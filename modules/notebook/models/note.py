"""
Note Model.

A note belongs to exactly one owner. Soft deletion sets deleted_at;
restoring clears it. Rows are never removed by the application.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modules.notebook.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from modules.notebook.models.summary import Summary
    from modules.notebook.models.tag import NoteTag


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    deleted_at is NULL for active notes.
    """

    __tablename__ = "notes"

    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=None,
    )

    tags: Mapped[list["NoteTag"]] = relationship(
        back_populates="note",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    summaries: Mapped[list["Summary"]] = relationship(
        back_populates="note",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
