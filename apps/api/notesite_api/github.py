from __future__ import annotations

import base64
import binascii
import logging
from urllib.parse import quote

import httpx

from notesite_api.domain.entities import ContentResult, DirectoryEntry, DirectoryListing, FileContent
from notesite_api.domain.exceptions import (
    ContentHostError,
    MalformedContentError,
    NotAFileError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
)

logger = logging.getLogger("notesite.github")

JSON_MEDIA_TYPE = "application/vnd.github+json"
RAW_MEDIA_TYPE = "application/vnd.github.raw"
API_VERSION = "2022-11-28"


def _join_base(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def _check_path(path: str) -> str:
    cleaned = path.strip().strip("/")
    if not cleaned:
        raise ValueError("path_empty")
    if ".." in cleaned.split("/"):
        raise ValueError("path_traversal_not_allowed")
    return cleaned


def _raise_for_status(resp: httpx.Response, path: str) -> None:
    status = resp.status_code
    if status < 400:
        return
    logger.info("content_http_error", extra={"path": path, "status": status})
    if status == 404:
        raise NotFoundError("content_not_found")
    if status == 401:
        raise UnauthorizedError("content_unauthorized")
    if status == 429 or (status == 403 and resp.headers.get("x-ratelimit-remaining") == "0"):
        raise RateLimitedError("content_rate_limited", status_code=status)
    if status == 403:
        raise UnauthorizedError("content_forbidden", status_code=status)
    raise ContentHostError(f"content_http_{status}", status_code=status)


def _decode_file(data: dict) -> FileContent:
    raw = data.get("content")
    if not isinstance(raw, str):
        raise MalformedContentError("content_missing")
    if data.get("encoding", "base64") != "base64":
        raise MalformedContentError("content_unknown_encoding")
    try:
        content = base64.b64decode(raw)
    except (binascii.Error, ValueError) as e:
        raise MalformedContentError("content_bad_base64") from e
    return FileContent(
        path=str(data.get("path") or ""),
        name=str(data.get("name") or ""),
        sha=str(data.get("sha") or ""),
        content=content,
    )


def _listing(path: str, data: list) -> DirectoryListing:
    entries = [
        DirectoryEntry(name=str(e.get("name") or ""), path=str(e.get("path") or ""), type=str(e.get("type") or ""))
        for e in data
        if isinstance(e, dict)
    ]
    return DirectoryListing(path=path, entries=entries)


class GitHubContents:
    """Read-only client for the GitHub repository contents endpoint.

    The underlying ``httpx.AsyncClient`` is owned by the caller; every call is
    one fresh round-trip with no caching and no retries.
    """

    def __init__(self, http: httpx.AsyncClient, *, api_url: str = "https://api.github.com", token: str | None = None) -> None:
        self.http = http
        self.api_url = api_url
        self.token = token

    def _headers(self, media_type: str) -> dict[str, str]:
        headers = {"Accept": media_type, "X-GitHub-Api-Version": API_VERSION}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, owner: str, repo: str, path: str) -> str:
        return _join_base(self.api_url, f"/repos/{owner}/{repo}/contents/{quote(path)}")

    async def _get(self, owner: str, repo: str, path: str, *, media_type: str, ref: str | None) -> httpx.Response:
        params = {"ref": ref} if ref else None
        try:
            return await self.http.get(self._url(owner, repo, path), headers=self._headers(media_type), params=params)
        except httpx.HTTPError as e:
            logger.warning("content_request_failed", extra={"path": path, "error": str(e)})
            raise ContentHostError("content_request_failed") from e

    async def get_content(self, owner: str, repo: str, path: str, ref: str | None = None) -> ContentResult:
        path = _check_path(path) if path.strip("/ ") else ""
        resp = await self._get(owner, repo, path, media_type=JSON_MEDIA_TYPE, ref=ref)
        _raise_for_status(resp, path)
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedContentError("content_bad_json") from e

        if isinstance(data, list):
            return _listing(path, data)
        if isinstance(data, dict) and data.get("type") == "file":
            return _decode_file(data)
        raise MalformedContentError("content_unexpected_shape")

    async def fetch_text(self, owner: str, repo: str, path: str, ref: str | None = None) -> str:
        result = await self.get_content(owner, repo, _check_path(path), ref=ref)
        if result.kind != "file":
            raise NotAFileError("content_is_directory")
        try:
            return result.text()
        except UnicodeDecodeError as e:
            raise MalformedContentError("content_not_utf8") from e

    async def fetch_raw(self, owner: str, repo: str, path: str, ref: str | None = None) -> bytes:
        path = _check_path(path)
        resp = await self._get(owner, repo, path, media_type=RAW_MEDIA_TYPE, ref=ref)
        _raise_for_status(resp, path)
        # Directories ignore the raw media type and come back as a JSON listing.
        if resp.headers.get("content-type", "").startswith("application/json"):
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, list):
                raise NotAFileError("content_is_directory")
        return resp.content

    async def probe(self, owner: str, repo: str, path: str, ref: str | None = None) -> bool:
        try:
            path = _check_path(path)
            params = {"ref": ref} if ref else None
            async with self.http.stream(
                "GET", self._url(owner, repo, path), headers=self._headers(JSON_MEDIA_TYPE), params=params
            ) as resp:
                ok = 200 <= resp.status_code < 300
        except (httpx.HTTPError, ValueError) as e:
            logger.info("content_probe_failed", extra={"path": path, "error": str(e)})
            return False
        if not ok:
            logger.info("content_probe_missing", extra={"path": path, "status": resp.status_code})
        return ok
