"""
Note schemas for CRUD, listing and search.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PaginationResponse


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty")
    return v


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=255, description="Note title")
    content: str = Field(min_length=1, description="Note content")

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v):
        return _strip_required(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Meeting Notes - Q4 Planning",
                "content": "1. Review Q3 performance\n2. Set Q4 objectives",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema, every field optional."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return v
        return _strip_required(v)


class NoteResponse(BaseModel):
    """Note as returned to its owner."""

    id: uuid.UUID
    title: str
    content: str
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


NoteListResponse = PaginationResponse[NoteResponse]
