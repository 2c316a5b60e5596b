"""
Noteful API — Tag Route Handlers
=================================

What:  HTTP surface for /api/tags. Same shape as /api/folders; creation is
       served at the collection root (POST /api/tags).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.routes import location_for
from noteful.schemas.common import ErrorResponse
from noteful.schemas.tag import TagIn, TagResponse
from noteful.services.tag_service import tag_service

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get("", response_model=List[TagResponse], summary="List all tags")
@router.get("/", response_model=List[TagResponse], include_in_schema=False)
async def list_tags(db: AsyncSession = Depends(get_db_session)) -> List[TagResponse]:
    return await tag_service.list_tags(db)


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses={404: {"description": "Tag not found", "model": ErrorResponse}},
    summary="Get a single tag by ID",
)
async def get_tag(tag_id: int, db: AsyncSession = Depends(get_db_session)) -> TagResponse:
    return await tag_service.get_tag(db, tag_id)


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing name", "model": ErrorResponse}},
    summary="Create a tag",
)
@router.post(
    "/",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_tag(
    request: Request,
    response: Response,
    body: Optional[TagIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    result = await tag_service.create_tag(db, (body or TagIn()).name)
    response.headers["Location"] = location_for(request, result.id)
    return result


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={
        400: {"description": "Missing name", "model": ErrorResponse},
        404: {"description": "Tag not found", "model": ErrorResponse},
    },
    summary="Rename a tag",
)
async def update_tag(
    tag_id: int,
    body: Optional[TagIn] = None,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.update_tag(db, tag_id, (body or TagIn()).name)


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a tag",
)
async def delete_tag(tag_id: int, db: AsyncSession = Depends(get_db_session)) -> Response:
    await tag_service.delete_tag(db, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
