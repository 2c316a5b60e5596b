"""
Noteful API — Tag SQLAlchemy Model
===================================

What:  ORM model representing the `tags` table.
Who:   Used by TagService for CRUD and by NoteService when joining a note's tags.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.note import Note


class Tag(Base):
    """A label attached to any number of notes through `notes_tags`."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    notes: Mapped[List["Note"]] = relationship(
        secondary="notes_tags",
        back_populates="tags",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
