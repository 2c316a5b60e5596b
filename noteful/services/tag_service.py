"""
Noteful API — Tag Service
==========================

What:  Business logic for the tag resource. Mirrors FolderService.
Who:   Called by noteful/routes/tags.py.

Deleting a tag also removes its `notes_tags` rows (ON DELETE CASCADE);
the notes themselves are untouched.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import NotFoundError, StoreError, ValidationError
from noteful.models import Tag
from noteful.schemas.tag import TagResponse

logger = logging.getLogger(__name__)


class TagService:
    """Business logic layer for tag operations; same contract as FolderService."""

    async def list_tags(self, db: AsyncSession) -> List[TagResponse]:
        try:
            result = await db.execute(select(Tag.id, Tag.name).order_by(Tag.id))
            rows = result.all()
        except SQLAlchemyError as exc:
            logger.error("Database error listing tags: %s", exc, exc_info=True)
            raise StoreError(message="Could not retrieve tags. Please try again.") from exc

        return [TagResponse.model_validate(row) for row in rows]

    async def get_tag(self, db: AsyncSession, tag_id: int) -> TagResponse:
        """Raises NotFoundError when no tag has this id."""
        try:
            result = await db.execute(select(Tag.id, Tag.name).where(Tag.id == tag_id))
            row = result.one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Database error fetching tag %s: %s", tag_id, exc)
            raise StoreError(
                message="Could not retrieve the tag. Please try again.",
                context={"tag_id": tag_id},
            ) from exc

        if row is None:
            raise NotFoundError(resource="tag", resource_id=tag_id)
        return TagResponse.model_validate(row)

    async def create_tag(self, db: AsyncSession, name: Optional[str]) -> TagResponse:
        if not name:
            raise ValidationError.missing_field("name")

        try:
            result = await db.execute(
                insert(Tag).values(name=name).returning(Tag.id, Tag.name)
            )
            row = result.one()
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error creating tag: %s", exc, exc_info=True)
            raise StoreError(message="Could not create the tag. Please try again.") from exc

        logger.info("Tag %s created", row.id)
        return TagResponse.model_validate(row)

    async def update_tag(
        self, db: AsyncSession, tag_id: int, name: Optional[str]
    ) -> TagResponse:
        if not name:
            raise ValidationError.missing_field("name")

        try:
            result = await db.execute(
                update(Tag)
                .where(Tag.id == tag_id)
                .values(name=name)
                .returning(Tag.id, Tag.name)
            )
            row = result.one_or_none()
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error updating tag %s: %s", tag_id, exc)
            raise StoreError(
                message="Could not update the tag. Please try again.",
                context={"tag_id": tag_id},
            ) from exc

        if row is None:
            raise NotFoundError(resource="tag", resource_id=tag_id)
        return TagResponse.model_validate(row)

    async def delete_tag(self, db: AsyncSession, tag_id: int) -> None:
        """Delete a tag if it exists. Its notes_tags rows go with it."""
        try:
            result = await db.execute(delete(Tag).where(Tag.id == tag_id))
            await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error deleting tag %s: %s", tag_id, exc)
            raise StoreError(
                message="Could not delete the tag. Please try again.",
                context={"tag_id": tag_id},
            ) from exc

        logger.info("Tag %s delete affected %s row(s)", tag_id, result.rowcount)


tag_service = TagService()
