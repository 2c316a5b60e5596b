"""
Noteful API — Folder SQLAlchemy Model
======================================

What:  ORM model representing the `folders` table.
Who:   Used by FolderService for CRUD and by NoteService to resolve `folderName`.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.note import Note


class Folder(Base):
    """
    A named container that notes may optionally point at.

    Deleting a folder leaves its notes in place with `folder_id` set to NULL
    (enforced by the foreign key on `notes.folder_id`).
    """

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    notes: Mapped[List["Note"]] = relationship(back_populates="folder", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
