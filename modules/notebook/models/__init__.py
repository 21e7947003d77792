# Import every model so Base.metadata knows all tables
from modules.notebook.models.base import Base
from modules.notebook.models.note import Note
from modules.notebook.models.summary import Summary
from modules.notebook.models.tag import NoteTag

__all__ = ["Base", "Note", "NoteTag", "Summary"]
