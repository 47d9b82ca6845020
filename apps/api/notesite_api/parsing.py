from __future__ import annotations

from dataclasses import dataclass

import yaml

from notesite_api.domain.entities import NoteMetadata
from notesite_api.util import isoformat_date


@dataclass(frozen=True)
class FrontmatterParse:
    frontmatter: dict
    body: str
    error: str | None


def parse_frontmatter(markdown: str) -> FrontmatterParse:
    if not markdown.startswith("---"):
        return FrontmatterParse(frontmatter={}, body=markdown, error=None)

    first_newline = markdown.find("\n")
    if first_newline == -1:
        return FrontmatterParse(frontmatter={}, body=markdown, error=None)

    first_line = markdown[:first_newline].rstrip("\r")
    if first_line != "---":
        return FrontmatterParse(frontmatter={}, body=markdown, error=None)

    # The closing fence is the next line that is exactly `---`.
    search_from = first_newline + 1
    while True:
        next_newline = markdown.find("\n", search_from)
        line_end = len(markdown) if next_newline == -1 else next_newline
        line = markdown[search_from:line_end].rstrip("\r")
        if line == "---":
            yaml_block = markdown[first_newline + 1 : search_from]
            body = "" if next_newline == -1 else markdown[next_newline + 1 :]
            try:
                parsed = yaml.safe_load(yaml_block) or {}
            except (yaml.YAMLError, ValueError):
                return FrontmatterParse(frontmatter={}, body=markdown, error="frontmatter_yaml_error")
            if not isinstance(parsed, dict):
                return FrontmatterParse(frontmatter={}, body=markdown, error="frontmatter_not_mapping")
            return FrontmatterParse(frontmatter=parsed, body=body, error=None)
        if next_newline == -1:
            return FrontmatterParse(frontmatter={}, body=markdown, error=None)
        search_from = next_newline + 1


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def extract_tags(frontmatter: dict) -> list[str]:
    raw = frontmatter.get("tags")
    if raw is None:
        return []
    if isinstance(raw, str):
        values = [raw]
    elif isinstance(raw, list):
        values = [str(v) for v in raw if isinstance(v, (str, int, float))]
    else:
        return []
    return [t for t in (v.strip() for v in values) if t]


def extract_is_public(frontmatter: dict) -> bool:
    raw = frontmatter.get("isPublic")
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() == "true"
    return False


def extract_metadata(frontmatter: dict, slug: str) -> NoteMetadata:
    title = _optional_str(frontmatter.get("title")) or slug
    return NoteMetadata(
        title=title,
        slug=slug,
        description=_optional_str(frontmatter.get("description")),
        date=isoformat_date(frontmatter.get("date")),
        tags=extract_tags(frontmatter),
        is_public=extract_is_public(frontmatter),
        cover_image=_optional_str(frontmatter.get("coverImage")),
    )
