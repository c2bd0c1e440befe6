from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_serializer


class NoteCreate(BaseModel):
    title: str = Field(..., max_length=255)
    content: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v


class NoteResponse(BaseModel):
    id: str
    title: str
    content: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @model_serializer(mode="wrap")
    def serialize_with_legacy_id(self, handler):
        # web clients key and delete notes by ``_id``
        data = handler(self)
        data["_id"] = data["id"]
        return data
