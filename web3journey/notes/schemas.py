"""Schemas for learning notes."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


NoteReferenceType = Literal["module", "topic", "project"]

MAX_TAGS = 20


def normalize_tags(tags: list[str]) -> list[str]:
    """Trim and lowercase tags, dropping blanks and duplicates while keeping order."""
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def count_words(content: str) -> int:
    return len(content.split())


class NoteSave(BaseModel):
    """Request body for creating or replacing a note."""

    title: str | None = Field(None, max_length=500)
    content: str = Field("", max_length=100_000)
    tags: list[str] = Field(default_factory=list)
    is_pinned: bool = False
    parent_id: str | None = Field(None, max_length=100)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        tags = normalize_tags(v)
        if len(tags) > MAX_TAGS:
            msg = f"A note can have at most {MAX_TAGS} tags"
            raise ValueError(msg)
        return tags


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    reference_type: NoteReferenceType
    reference_id: str
    parent_id: str | None = None
    title: str | None = None
    content: str
    tags: list[str]
    is_pinned: bool
    word_count: int
    created_at: datetime
    updated_at: datetime
