from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class NoteMetadataOut(BaseModel):
    slug: str
    title: str
    description: Optional[str] = None
    date: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    cover_image: Optional[str] = None


class NoteListOut(BaseModel):
    items: list[NoteMetadataOut] = Field(default_factory=list)


class NoteDetailOut(BaseModel):
    metadata: NoteMetadataOut
    content_markdown: str
    content_html: str
