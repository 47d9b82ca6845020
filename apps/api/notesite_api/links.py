"""Rewriting of image references in note bodies.

Obsidian notes embed attachments as ``![[Pasted image.png]]``. The passes in
this module turn those into standard Markdown images with percent-encoded
destinations, and later resolve the relative destinations into absolute URLs
on the public image repository.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import quote, unquote

logger = logging.getLogger("notesite.links")

DEFAULT_ATTACHMENT_DIR = "files"

_EMBED_RE = re.compile(r"!\[\[(.+?)\]\]")
_IMAGE_RE = re.compile(r"!\[(.*?)\]\((.*?)\)")
_PERCENT_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters left alone by JavaScript's encodeURI / encodeURIComponent.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"
_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri(value: str) -> str:
    return quote(value, safe=_URI_SAFE)


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def try_decode(value: str) -> str | None:
    """Percent-decode ``value``; ``None`` when it is not validly encoded."""
    if _PERCENT_ESCAPE_RE.search(value):
        return None
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return None


def _with_default_dir(path: str) -> str:
    if "/" in path:
        return path
    return f"{DEFAULT_ATTACHMENT_DIR}/{path}"


def _embed_to_image(match: re.Match) -> str:
    name = match.group(1)
    alt_text = name.rsplit("/", 1)[-1]
    resolved = _with_default_dir(name)
    logger.debug("embed_rewrite", extra={"embed": name, "path": resolved})
    return f"![{alt_text}]({encode_uri(resolved)})"


def rewrite_embeds(body: str) -> str:
    return _EMBED_RE.sub(_embed_to_image, body)


def _escape_image(match: re.Match) -> str:
    alt_text, url = match.group(1), match.group(2)
    if "%" in url:
        return match.group(0)
    return f"![{alt_text}]({encode_uri(url)})"


def escape_image_links(body: str) -> str:
    return _IMAGE_RE.sub(_escape_image, body)


def rewrite_image_links(body: str) -> str:
    return escape_image_links(rewrite_embeds(body))


def _encode_segments(path: str) -> str:
    return "/".join(encode_component(part) for part in path.split("/"))


def resolve_image_url(path: str, base_url: str) -> str:
    """Resolve an image destination against the public image repository.

    Absolute URLs pass through untouched. Relative paths are decoded once,
    unwrapped from a leftover ``![[...]]`` embed, placed under the default
    attachment directory when they have no directory of their own, and then
    encoded segment by segment under ``base_url``.
    """
    if path.startswith("http"):
        return path

    decoded = path
    if "%" in path:
        attempt = try_decode(path)
        if attempt is None:
            logger.warning("image_path_decode_failed", extra={"path": path})
        else:
            decoded = attempt

    embed = _EMBED_RE.search(decoded)
    if embed:
        decoded = embed.group(1)

    return base_url.rstrip("/") + "/" + _encode_segments(_with_default_dir(decoded))


def raw_file_url(path: str, base_url: str) -> str:
    return base_url.rstrip("/") + "/" + _encode_segments(path.lstrip("/"))
