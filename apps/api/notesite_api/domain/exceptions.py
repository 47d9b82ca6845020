from __future__ import annotations


class ContentError(RuntimeError):
    """Base error for failures talking to the content host."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ContentError):
    status_code = 404


class UnauthorizedError(ContentError):
    status_code = 401


class RateLimitedError(ContentError):
    status_code = 429


class NotAFileError(ContentError):
    """The path resolved to a directory listing instead of a file."""

    status_code = 400


class MalformedContentError(ContentError):
    status_code = 502


class ContentHostError(ContentError):
    """Transport failure or an upstream status with no dedicated error."""
