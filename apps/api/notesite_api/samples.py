from __future__ import annotations

from notesite_api.domain.entities import NoteContent, NoteMetadata
from notesite_api.links import rewrite_image_links
from notesite_api.notes import sort_notes


SAMPLE_NOTES: list[NoteMetadata] = [
    NoteMetadata(
        title="Getting started with Obsidian",
        slug="getting-started-with-obsidian",
        description="A guide to getting started with Obsidian and setting up a workflow",
        date="2023-01-15",
        tags=["obsidian", "tutorial", "productivity"],
        is_public=True,
        cover_image="https://images.unsplash.com/photo-1471107340929-a87cd0f5b5f3?q=80&w=1266&auto=format&fit=crop",
    ),
    NoteMetadata(
        title="Markdown syntax",
        slug="markdown-syntax",
        description="A complete guide to Markdown syntax for formatting notes",
        date="2023-02-20",
        tags=["markdown", "tutorial", "formatting"],
        is_public=True,
    ),
    NoteMetadata(
        title="Advanced Obsidian plugins",
        slug="advanced-obsidian-plugins",
        description="An overview of useful plugins that extend Obsidian",
        date="2023-03-10",
        tags=["obsidian", "plugins", "productivity"],
        is_public=True,
        cover_image="https://images.unsplash.com/photo-1517842645767-c639042777db?q=80&w=1170&auto=format&fit=crop",
    ),
]

SAMPLE_BODY = """
# Sample Obsidian note

This is a **demo** note used when no GitHub credentials are configured.

## Supported features

- Bulleted lists
- *Italic* and **bold** text
- [Links](https://obsidian.md)

### Code

```python
def hello():
    print("Hello from Obsidian!")
```

## Images

A regular Markdown image:

![Sample image](https://images.unsplash.com/photo-1468421870903-4df1664ac249?w=800&auto=format&fit=crop)

And an Obsidian embed:

![[Pasted image 20250301151803.png]]
"""


class SampleNoteSource:
    """Serves built-in demo notes when no GitHub token is configured."""

    def __init__(self, notes: list[NoteMetadata] | None = None, body: str = SAMPLE_BODY) -> None:
        self.notes = {n.slug: n for n in (SAMPLE_NOTES if notes is None else notes)}
        self.body = body

    async def exists(self, slug: str) -> bool:
        return slug in self.notes

    async def fetch_note(self, slug: str) -> NoteContent | None:
        metadata = self.notes.get(slug)
        if metadata is None:
            return None
        return NoteContent(content=rewrite_image_links(self.body), metadata=metadata)

    async def list_notes(self) -> list[NoteMetadata]:
        return sort_notes(list(self.notes.values()))
