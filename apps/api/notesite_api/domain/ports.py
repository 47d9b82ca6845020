from __future__ import annotations

from typing import Protocol, runtime_checkable

from notesite_api.domain.entities import NoteContent, NoteMetadata


@runtime_checkable
class NoteSource(Protocol):
    async def exists(self, slug: str) -> bool:
        ...

    async def fetch_note(self, slug: str) -> NoteContent | None:
        ...

    async def list_notes(self) -> list[NoteMetadata]:
        ...
