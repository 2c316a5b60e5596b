"""
Noteful API — Note Service
===========================

What:  Business logic for the note resource: search/list, get, create, update, delete.
Why:   Encapsulates all SQL for notes, independent of HTTP concerns.
How:   Writes go through a single INSERT/UPDATE/DELETE statement; every note
       that is returned is (re)read with its folder and tags eager-loaded so
       `folderName` and `tags` are always populated.
Who:   Called by noteful/routes/notes.py.

Read Query:
    SELECT notes.*, folders.name FROM notes
    LEFT OUTER JOIN folders ON folders.id = notes.folder_id
    [WHERE notes.title LIKE '%' || :term || '%' ESCAPE '/']
    ORDER BY notes.id
    + one SELECT ... FROM tags JOIN notes_tags WHERE note_id IN (...) for the tags

Search Semantics:
    The search term is a literal substring of the title. Wildcard characters
    in the term are escaped (autoescape), so "100%" only matches titles that
    contain "100%". Case sensitivity follows the store's LIKE.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from noteful.exceptions import NotFoundError, StoreError, ValidationError
from noteful.models import Note
from noteful.schemas.note import NoteResponse
from noteful.schemas.tag import TagResponse

logger = logging.getLogger(__name__)


def _note_query():
    return select(Note).options(joinedload(Note.folder), selectinload(Note.tags))


def _unknown_folder(folder_id: Optional[int]) -> ValidationError:
    # folder_id is the only foreign key a note write can violate
    return ValidationError(
        message=f"Folder with ID '{folder_id}' does not exist",
        field="folderId",
    )


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        folder_id=note.folder_id,
        folder_name=note.folder.name if note.folder is not None else None,
        tags=[TagResponse(id=tag.id, name=tag.name) for tag in note.tags],
    )


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): all notes by ascending id, optionally filtered by title
        - get_note(): single note with NotFoundError on absence
        - create_note() / update_note(): full replacement of title, content, folder
        - delete_note(): unconditional delete

    Error Handling Strategy:
        Missing title is rejected before any statement runs. SQLAlchemy errors
        are wrapped in StoreError (hides internal details); NotFoundError is
        raised outside the try blocks so it is never re-wrapped.
    """

    async def _fetch(self, db: AsyncSession, note_id: int) -> Optional[Note]:
        # populate_existing: a note already in the session is refreshed, not reused
        result = await db.execute(
            _note_query()
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_notes(
        self,
        db: AsyncSession,
        search_term: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List notes ordered by id.

        Args:
            db: Async database session
            search_term: Keep only notes whose title contains this text.
                         None or "" means no filter.
        """
        query = _note_query().order_by(Note.id)
        if search_term:
            query = query.where(Note.title.contains(search_term, autoescape=True))

        try:
            result = await db.execute(query)
            notes = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Database error listing notes: %s", exc, exc_info=True)
            raise StoreError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(exc).__name__},
            ) from exc

        return [_to_response(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            StoreError: Query execution failed (→ 500)
        """
        try:
            note = await self._fetch(db, note_id)
        except SQLAlchemyError as exc:
            logger.error("Database error fetching note %s: %s", note_id, exc)
            raise StoreError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            ) from exc

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return _to_response(note)

    async def create_note(
        self,
        db: AsyncSession,
        title: Optional[str],
        content: Optional[str] = None,
        folder_id: Optional[int] = None,
    ) -> NoteResponse:
        """
        Insert a note and return it with its generated id (tags empty).

        Raises:
            ValidationError: `title` is absent or empty (→ 400, store untouched)
            ValidationError: `folder_id` names no folder (→ 400)
            StoreError: Insert failed (→ 500)
        """
        if not title:
            raise ValidationError.missing_field("title")

        try:
            result = await db.execute(
                insert(Note)
                .values(title=title, content=content, folder_id=folder_id)
                .returning(Note.id)
            )
            note_id = result.scalar_one()
            await db.commit()
            note = await self._fetch(db, note_id)
        except IntegrityError as exc:
            raise _unknown_folder(folder_id) from exc
        except SQLAlchemyError as exc:
            logger.error("Database error creating note: %s", exc, exc_info=True)
            raise StoreError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(exc).__name__},
            ) from exc

        logger.info("Note %s created", note_id)
        return _to_response(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        title: Optional[str],
        content: Optional[str] = None,
        folder_id: Optional[int] = None,
    ) -> NoteResponse:
        """
        Replace title, content and folder of an existing note.

        Not a patch: passing content=None clears the stored content.

        Raises:
            ValidationError: `title` is absent or empty (→ 400, store untouched)
            ValidationError: `folder_id` names no folder (→ 400)
            NotFoundError: No note has this id (→ 404)
            StoreError: Update failed (→ 500)
        """
        if not title:
            raise ValidationError.missing_field("title")

        note = None
        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(title=title, content=content, folder_id=folder_id)
                .returning(Note.id)
            )
            updated_id = result.scalar_one_or_none()
            if updated_id is not None:
                await db.commit()
                note = await self._fetch(db, updated_id)
        except IntegrityError as exc:
            raise _unknown_folder(folder_id) from exc
        except SQLAlchemyError as exc:
            logger.error("Database error updating note %s: %s", note_id, exc)
            raise StoreError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            ) from exc

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %s updated", note_id)
        return _to_response(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Delete a note if it exists. Absence is not an error.

        Its tag associations go with it (ON DELETE CASCADE on notes_tags).
        """
        try:
            result = await db.execute(delete(Note).where(Note.id == note_id))
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error deleting note %s: %s", note_id, exc)
            raise StoreError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            ) from exc

        logger.info("Note %s delete affected %s row(s)", note_id, result.rowcount)


note_service = NoteService()
