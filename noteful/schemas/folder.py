"""
Noteful API — Folder Schemas
=============================

What:  Request and response contracts for /api/folders.
Why:   `name` is Optional on input so that a missing name reaches FolderService
       and is reported as 400 "Missing `name` in request body" rather than
       FastAPI's generic schema error.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FolderIn(BaseModel):
    """Body of POST /api/folders and PUT /api/folders/{id}."""
    name: Optional[str] = Field(default=None, description="Folder name (required, non-empty)")


class FolderResponse(BaseModel):
    id: int = Field(description="Store-generated folder identifier")
    name: str = Field(description="Folder name")

    model_config = {"from_attributes": True}
