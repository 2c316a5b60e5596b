"""
Noteful API — Tag Schemas
==========================

What:  Request and response contracts for /api/tags.
       TagResponse is also embedded in every NoteResponse.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TagIn(BaseModel):
    """Body of POST /api/tags and PUT /api/tags/{id}."""
    name: Optional[str] = Field(default=None, description="Tag name (required, non-empty)")


class TagResponse(BaseModel):
    id: int = Field(description="Store-generated tag identifier")
    name: str = Field(description="Tag name")

    model_config = {"from_attributes": True}
