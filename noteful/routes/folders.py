"""
Noteful API — Folder Route Handlers
====================================

What:  HTTP surface for /api/folders (list, get, create, update, delete).
How:   Extracts path/body parameters, delegates to FolderService, sets the
       status code and Location header.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.routes import location_for
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderIn, FolderResponse
from noteful.services.folder_service import folder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["Folders"])


@router.get("", response_model=List[FolderResponse], summary="List all folders")
@router.get("/", response_model=List[FolderResponse], include_in_schema=False)
async def list_folders(
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    return await folder_service.list_folders(db)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="Get a single folder by ID",
)
async def get_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.get_folder(db, folder_id)


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing name", "model": ErrorResponse}},
    summary="Create a folder",
)
@router.post(
    "/",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_folder(
    request: Request,
    response: Response,
    body: Optional[FolderIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    """Returns the new folder with its generated id and a Location header pointing at it."""
    result = await folder_service.create_folder(db, (body or FolderIn()).name)
    response.headers["Location"] = location_for(request, result.id)
    return result


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={
        400: {"description": "Missing name", "model": ErrorResponse},
        404: {"description": "Folder not found", "model": ErrorResponse},
    },
    summary="Rename a folder",
)
async def update_folder(
    folder_id: int,
    body: Optional[FolderIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.update_folder(db, folder_id, (body or FolderIn()).name)


@router.delete(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a folder",
    description="Always 204, whether or not the folder existed.",
)
async def delete_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete_folder(db, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
