"""
Noteful API — Note SQLAlchemy Model
====================================

What:  ORM model representing the `notes` table and the `notes_tags`
       association table.
Why:   Maps rows to Python objects; the relationships let NoteService load
       `folderName` and `tags` with eager joins in the same round-trip.
Who:   Used by NoteService for CRUD and by the seed loader.

Table Design:
    - folder_id: nullable FK, ON DELETE SET NULL (deleting a folder keeps its notes)
    - notes_tags: composite PK (note_id, tag_id), both sides ON DELETE CASCADE
      so deleting a note or a tag never leaves dangling associations
"""

from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.folder import Folder
from noteful.models.tag import Tag

notes_tags = Table(
    "notes_tags",
    Base.metadata,
    Column("note_id", ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Note(Base):
    """
    A titled piece of text, optionally filed in a folder and labelled with tags.

    Query Patterns:
        - List: SELECT ... ORDER BY id, optional title LIKE '%term%'
        - Get single note: SELECT ... WHERE id = :id
        Both eager-load `folder` (joined) and `tags` (selectin); relationships
        are never lazy-loaded under the async session.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    folder_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
    )

    folder: Mapped[Optional[Folder]] = relationship(back_populates="notes")
    tags: Mapped[List[Tag]] = relationship(
        secondary=notes_tags,
        back_populates="notes",
        order_by=Tag.id,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"
