"""
Noteful API — Notes Route Handlers
===================================

What:  Handles /api/notes: search/list, detail, create, update, delete.
Why:   The note list is the main view of the front-end; every other verb
       edits a single note.
How:   Extracts query/path/body parameters, delegates to NoteService,
       returns JSON with the status code for the verb.
Who:   Called by the static front-end served from the public directory.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.routes import location_for
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteIn, NoteResponse
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List notes, optionally filtered by title",
    description=(
        "Returns every note ordered by ascending id. With `searchTerm`, only notes "
        "whose title contains the term as a literal substring are returned."
    ),
)
@router.get("/", response_model=List[NoteResponse], include_in_schema=False)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None,
        alias="searchTerm",
        description="Substring to look for in note titles. Empty means no filter.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db, search_term=search_term)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        200: {"description": "Full note details", "model": NoteResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Get full details of a single note, including its folder name and tags.

    Args:
        note_id: Integer path parameter. A non-integer id is answered with 400
                 by the request validation handler.
    """
    return await note_service.get_note(db, note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        400: {"description": "Missing title", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
@router.post(
    "/",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_note(
    request: Request,
    response: Response,
    body: Optional[NoteIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note and point the client at it.

    Response:
        201 Created, the stored note as body, and
        Location: /api/notes/<new id>
    """
    body = body or NoteIn()
    result = await note_service.create_note(
        db,
        title=body.title,
        content=body.content,
        folder_id=body.folder_id,
    )
    response.headers["Location"] = location_for(request, result.id)
    return result


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        200: {"description": "Updated note", "model": NoteResponse},
        400: {"description": "Missing title", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's title, content and folder",
)
async def update_note(
    note_id: int,
    body: Optional[NoteIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    body = body or NoteIn()
    return await note_service.update_note(
        db,
        note_id,
        title=body.title,
        content=body.content,
        folder_id=body.folder_id,
    )


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a note",
    description="Always 204, whether or not the note existed.",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
