from __future__ import annotations

from html import escape
from urllib.parse import quote

from notesite_api.domain.entities import NoteMetadata

DEFAULT_DESCRIPTION = "A note from Obsidian"


def _layout(title: str, description: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f'<meta name="description" content="{escape(description)}">\n'
        "</head>\n"
        "<body>\n"
        f'<main class="container">\n{body}\n</main>\n'
        "</body>\n"
        "</html>\n"
    )


def render_note_page(metadata: NoteMetadata, content_html: str, *, site_title: str) -> str:
    parts = [f'<h1 class="note-title">{escape(metadata.title)}</h1>']
    if metadata.description:
        parts.append(f'<p class="note-description">{escape(metadata.description)}</p>')
    if metadata.date:
        parts.append(f'<time class="note-date" datetime="{escape(metadata.date)}">{escape(metadata.date)}</time>')
    if metadata.cover_image:
        parts.append(
            f'<div class="note-cover"><img src="{escape(metadata.cover_image)}" alt="{escape(metadata.title)}"></div>'
        )
    header = "<header>\n" + "\n".join(parts) + "\n</header>"
    article = f'<article class="note">\n{header}\n<div class="note-body">\n{content_html}</div>\n</article>'
    return _layout(
        f"{metadata.title} | {site_title}",
        metadata.description or DEFAULT_DESCRIPTION,
        article,
    )


def render_index_page(notes: list[NoteMetadata], *, site_title: str) -> str:
    items: list[str] = []
    for n in notes:
        meta = []
        if n.date:
            meta.append(f'<time datetime="{escape(n.date)}">{escape(n.date)}</time>')
        if n.tags:
            meta.append(" ".join(f'<span class="tag">#{escape(t)}</span>' for t in n.tags))
        desc = f"<p>{escape(n.description)}</p>" if n.description else ""
        items.append(
            f'<li><a href="/notes/{escape(quote(n.slug))}">{escape(n.title)}</a>'
            f"{' '.join(meta)}{desc}</li>"
        )
    listing = "<ul class=\"notes\">\n" + "\n".join(items) + "\n</ul>" if items else "<p>No notes yet.</p>"
    return _layout(site_title, DEFAULT_DESCRIPTION, f"<h1>{escape(site_title)}</h1>\n{listing}")


def render_not_found_page(*, site_title: str) -> str:
    return _layout(
        f"Note not found | {site_title}",
        DEFAULT_DESCRIPTION,
        '<h1>Note not found</h1>\n<p><a href="/">Back to all notes</a></p>',
    )
