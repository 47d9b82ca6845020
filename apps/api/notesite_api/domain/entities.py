from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class NoteMetadata:
    title: str
    slug: str
    description: str | None = None
    date: str | None = None
    tags: list[str] = field(default_factory=list)
    is_public: bool = False
    cover_image: str | None = None


@dataclass(frozen=True)
class NoteContent:
    content: str
    metadata: NoteMetadata


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: str
    type: str


@dataclass(frozen=True)
class FileContent:
    path: str
    name: str
    sha: str
    content: bytes
    kind: Literal["file"] = "file"

    def text(self) -> str:
        return self.content.decode("utf-8")


@dataclass(frozen=True)
class DirectoryListing:
    path: str
    entries: list[DirectoryEntry]
    kind: Literal["dir"] = "dir"


ContentResult = Union[FileContent, DirectoryListing]
