"""
Noteful API — Note Request/Response Schemas
============================================

What:  Pydantic models defining the /api/notes contract.
Why:   Input validation, camelCase serialization, and OpenAPI doc generation.
How:   FastAPI serializes responses by alias, so `folder_id` goes out as
       `folderId`; `populate_by_name` lets Python code (and clients) use
       either spelling on the way in.

Design Decision:
    `title` is Optional on input. The presence check lives in NoteService so
    the error message and status code are the same for every resource.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from noteful.schemas.tag import TagResponse


class NoteIn(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Every field is replaced on update: an omitted `content` or `folderId`
    is stored as NULL, not left as it was.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[int] = Field(
        default=None,
        alias="folderId",
        description="Folder to file the note in (null for none)",
    )

    model_config = {"populate_by_name": True}


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every /api/notes endpoint that has a body.

    Fields:
        - folderName: joined from `folders`, null when the note has no folder
        - tags: joined through `notes_tags`, ordered by tag id
    """
    id: int = Field(description="Store-generated note identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    folder_name: Optional[str] = Field(default=None, alias="folderName")
    tags: List[TagResponse] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
