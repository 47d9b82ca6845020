from __future__ import annotations

import asyncio
import logging

from notesite_api.domain.entities import DirectoryEntry, NoteContent, NoteMetadata
from notesite_api.domain.exceptions import ContentError, MalformedContentError, NotFoundError
from notesite_api.github import GitHubContents
from notesite_api.links import rewrite_image_links
from notesite_api.parsing import extract_metadata, parse_frontmatter
from notesite_api.util import is_valid_slug, slug_from_filename

logger = logging.getLogger("notesite.notes")


def note_path(slug: str, notes_path: str = "") -> str:
    base = notes_path.strip().strip("/")
    if base and base != ".":
        return f"{base}/{slug}.md"
    return f"{slug}.md"


def build_note(markdown: str, slug: str) -> NoteContent:
    fm = parse_frontmatter(markdown)
    if fm.error:
        logger.warning("frontmatter_invalid", extra={"slug": slug, "error": fm.error})
    return NoteContent(
        content=rewrite_image_links(fm.body),
        metadata=extract_metadata(fm.frontmatter, slug),
    )


def sort_notes(notes: list[NoteMetadata]) -> list[NoteMetadata]:
    by_slug = sorted(notes, key=lambda n: n.slug)
    dated = sorted((n for n in by_slug if n.date), key=lambda n: n.date or "", reverse=True)
    return dated + [n for n in by_slug if not n.date]


class GitHubNoteSource:
    def __init__(self, contents: GitHubContents, *, owner: str, repo: str, notes_path: str = "") -> None:
        self.contents = contents
        self.owner = owner
        self.repo = repo
        self.notes_path = notes_path

    def path_for(self, slug: str) -> str:
        return note_path(slug, self.notes_path)

    async def exists(self, slug: str) -> bool:
        if not is_valid_slug(slug):
            return False
        return await self.contents.probe(self.owner, self.repo, self.path_for(slug))

    async def fetch_note(self, slug: str) -> NoteContent | None:
        if not is_valid_slug(slug):
            return None
        path = self.path_for(slug)
        logger.info("note_fetch", extra={"slug": slug, "path": path})
        try:
            markdown = await self.contents.fetch_text(self.owner, self.repo, path)
        except NotFoundError:
            return None
        return build_note(markdown, slug)

    async def _fetch_metadata(self, entry: DirectoryEntry) -> NoteMetadata | None:
        slug = slug_from_filename(entry.name)
        try:
            markdown = await self.contents.fetch_text(self.owner, self.repo, entry.path)
        except ContentError as e:
            logger.warning("note_metadata_failed", extra={"slug": slug, "error": str(e)})
            return None
        fm = parse_frontmatter(markdown)
        return extract_metadata(fm.frontmatter, slug)

    async def list_notes(self) -> list[NoteMetadata]:
        directory = "" if self.notes_path.strip() in ("", ".") else self.notes_path
        listing = await self.contents.get_content(self.owner, self.repo, directory)
        if listing.kind != "dir":
            raise MalformedContentError("notes_path_not_directory")

        entries = [e for e in listing.entries if e.type == "file" and e.name.endswith(".md")]
        results = await asyncio.gather(*(self._fetch_metadata(e) for e in entries))
        return sort_notes([m for m in results if m is not None])
