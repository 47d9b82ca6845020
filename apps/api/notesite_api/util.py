from __future__ import annotations

from datetime import date, datetime
from pathlib import PurePosixPath


_IMAGE_CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
}


def image_content_type(path: str) -> str:
    return _IMAGE_CONTENT_TYPES.get(PurePosixPath(path).suffix.lower(), "application/octet-stream")


def slug_from_filename(name: str) -> str:
    return name.removesuffix(".md")


def is_valid_slug(slug: str) -> bool:
    if not slug or not slug.strip():
        return False
    return not any(ch in slug for ch in ("/", "\\", "\x00"))


def isoformat_date(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = str(value).strip()
    return text or None
