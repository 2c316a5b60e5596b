"""
Noteful API — Folder Service
=============================

What:  Business logic for the folder resource: list, get, create, update, delete.
Why:   Keeps SQL and required-field checks out of the route handlers.
How:   Each method checks its input, issues one SQL statement through the
       request's AsyncSession, and maps the result to a FolderResponse.
Who:   Called by noteful/routes/folders.py.

Error Handling Strategy:
    - Missing/empty name  → ValidationError, raised before the store is touched
    - No row matched      → NotFoundError
    - SQLAlchemyError     → StoreError (original chained, details logged)
    Delete performs no existence check and never raises NotFoundError.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import NotFoundError, StoreError, ValidationError
from noteful.models import Folder
from noteful.schemas.folder import FolderResponse

logger = logging.getLogger(__name__)


class FolderService:
    """
    Stateless service; receives the session for every call.

    Responsibilities:
        - list_folders(): all folders ordered by id
        - get_folder(): single folder or NotFoundError
        - create_folder() / update_folder(): full replacement of `name`
        - delete_folder(): unconditional delete
    """

    async def list_folders(self, db: AsyncSession) -> List[FolderResponse]:
        try:
            result = await db.execute(select(Folder.id, Folder.name).order_by(Folder.id))
            rows = result.all()
        except SQLAlchemyError as exc:
            logger.error("Database error listing folders: %s", exc, exc_info=True)
            raise StoreError(
                message="Could not retrieve folders. Please try again.",
                context={"error_type": type(exc).__name__},
            ) from exc

        return [FolderResponse.model_validate(row) for row in rows]

    async def get_folder(self, db: AsyncSession, folder_id: int) -> FolderResponse:
        """
        Retrieve a single folder by ID.

        Raises:
            NotFoundError: No folder has this id (→ 404)
            StoreError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Folder.id, Folder.name).where(Folder.id == folder_id)
            )
            row = result.one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Database error fetching folder %s: %s", folder_id, exc)
            raise StoreError(
                message="Could not retrieve the folder. Please try again.",
                context={"folder_id": folder_id},
            ) from exc

        if row is None:
            raise NotFoundError(resource="folder", resource_id=folder_id)
        return FolderResponse.model_validate(row)

    async def create_folder(self, db: AsyncSession, name: Optional[str]) -> FolderResponse:
        """
        Insert a new folder and return it with its generated id.

        Raises:
            ValidationError: `name` is absent or empty (→ 400, store untouched)
            StoreError: Insert failed (→ 500)
        """
        if not name:
            raise ValidationError.missing_field("name")

        try:
            result = await db.execute(
                insert(Folder).values(name=name).returning(Folder.id, Folder.name)
            )
            row = result.one()
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error creating folder: %s", exc, exc_info=True)
            raise StoreError(
                message="Could not create the folder. Please try again.",
                context={"error_type": type(exc).__name__},
            ) from exc

        logger.info("Folder %s created", row.id)
        return FolderResponse.model_validate(row)

    async def update_folder(
        self, db: AsyncSession, folder_id: int, name: Optional[str]
    ) -> FolderResponse:
        """
        Replace the name of an existing folder.

        Raises:
            ValidationError: `name` is absent or empty (→ 400, store untouched)
            NotFoundError: No folder has this id (→ 404)
            StoreError: Update failed (→ 500)
        """
        if not name:
            raise ValidationError.missing_field("name")

        try:
            result = await db.execute(
                update(Folder)
                .where(Folder.id == folder_id)
                .values(name=name)
                .returning(Folder.id, Folder.name)
            )
            row = result.one_or_none()
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error updating folder %s: %s", folder_id, exc)
            raise StoreError(
                message="Could not update the folder. Please try again.",
                context={"folder_id": folder_id},
            ) from exc

        if row is None:
            raise NotFoundError(resource="folder", resource_id=folder_id)
        return FolderResponse.model_validate(row)

    async def delete_folder(self, db: AsyncSession, folder_id: int) -> None:
        """
        Delete a folder if it exists. Absence is not an error.

        Notes filed in the folder survive with `folder_id` set to NULL.
        """
        try:
            result = await db.execute(delete(Folder).where(Folder.id == folder_id))
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error deleting folder %s: %s", folder_id, exc)
            raise StoreError(
                message="Could not delete the folder. Please try again.",
                context={"folder_id": folder_id},
            ) from exc

        logger.info("Folder %s delete affected %s row(s)", folder_id, result.rowcount)


folder_service = FolderService()
