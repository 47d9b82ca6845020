from __future__ import annotations

from marko import Markdown
from marko.helpers import MarkoExtension

from notesite_api.links import resolve_image_url


def _note_renderer_extension(image_base_url: str) -> MarkoExtension:
    class NoteRendererMixin:
        def render_image(self, element) -> str:
            if not (element.dest or "").strip():
                return ""
            element.dest = resolve_image_url(element.dest or "", image_base_url)
            html = super().render_image(element)
            if 'alt=""' in html:
                html = html.replace('alt=""', 'alt="Image"', 1)
            return html.replace("<img ", '<img loading="lazy" ', 1)

        def render_link(self, element) -> str:
            html = super().render_link(element)
            if (element.dest or "").startswith("http"):
                html = html.replace("<a ", '<a target="_blank" rel="noopener noreferrer" ', 1)
            return html

    return MarkoExtension(renderer_mixins=[NoteRendererMixin])


def render_markdown(body: str, image_base_url: str) -> str:
    md = Markdown(extensions=["gfm", _note_renderer_extension(image_base_url)])
    return md.convert(body)
