from __future__ import annotations

import base64
import dataclasses
from typing import Optional

import httpx
import pytest

from notesite_api.config import Settings, load_settings


class FakeGitHub:
    """In-memory stand-in for the GitHub contents endpoint."""

    def __init__(self) -> None:
        self.files: dict[tuple[str, str], bytes] = {}
        self.failures: dict[tuple[str, str], tuple[int, dict]] = {}
        self.requests: list[httpx.Request] = []

    def add_file(self, repo: str, path: str, content: bytes | str) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.files[(repo, path)] = content

    def fail(self, repo: str, path: str, status: int, headers: Optional[dict] = None) -> None:
        self.failures[(repo, path)] = (status, headers or {})

    def _children(self, repo: str, directory: str) -> list[dict]:
        prefix = f"{directory}/" if directory else ""
        entries: dict[str, dict] = {}
        for file_repo, path in self.files:
            if file_repo != repo or not path.startswith(prefix):
                continue
            rest = path[len(prefix) :]
            name, _, tail = rest.partition("/")
            kind = "dir" if tail else "file"
            entries[name] = {"name": name, "path": prefix + name, "type": kind}
        return sorted(entries.values(), key=lambda e: e["name"])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.split("/", 5)
        if len(parts) < 5 or parts[1] != "repos" or parts[4] != "contents":
            return httpx.Response(400, json={"message": "bad request"})
        repo = parts[3]
        path = parts[5].strip("/") if len(parts) == 6 else ""

        if (repo, path) in self.failures:
            status, headers = self.failures[(repo, path)]
            return httpx.Response(status, json={"message": "failure"}, headers=headers)

        if (repo, path) in self.files:
            content = self.files[(repo, path)]
            if request.headers.get("accept") == "application/vnd.github.raw":
                return httpx.Response(200, content=content, headers={"content-type": "application/vnd.github.raw"})
            return httpx.Response(
                200,
                json={
                    "type": "file",
                    "name": path.rsplit("/", 1)[-1],
                    "path": path,
                    "sha": "abc123",
                    "encoding": "base64",
                    "content": base64.b64encode(content).decode("ascii"),
                },
            )

        children = self._children(repo, path)
        if children:
            return httpx.Response(200, json=children)
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def settings(monkeypatch) -> Settings:
    for name in ("GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO", "NOTES_PATH", "IMAGES_REPO", "GITHUB_BRANCH"):
        monkeypatch.delenv(name, raising=False)
    return dataclasses.replace(
        load_settings(),
        github_token="test-token",
        github_owner="octo",
        github_repo="vault",
        images_repo="pics",
        notes_path="notes",
    )


@pytest.fixture
def http_client(github: FakeGitHub) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(github.handler))
