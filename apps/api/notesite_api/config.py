from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    github_token: str | None
    github_owner: str
    github_repo: str
    notes_path: str
    images_repo: str
    github_branch: str
    github_api_url: str
    raw_content_url: str
    http_timeout_s: float
    image_cache_max_age: int
    site_title: str
    api_debug_log: bool
    log_level: str

    @property
    def use_samples(self) -> bool:
        return not self.github_token

    @property
    def image_base_url(self) -> str:
        return (
            f"{self.raw_content_url.rstrip('/')}/{self.github_owner}/{self.images_repo}"
            f"/refs/heads/{self.github_branch}/"
        )


def load_settings() -> Settings:
    github_token = os.environ.get("GITHUB_TOKEN") or None
    github_owner = os.environ.get("GITHUB_OWNER") or "frechezz"
    github_repo = os.environ.get("GITHUB_REPO") or "obsidianvault"
    notes_path = os.environ.get("NOTES_PATH", "").strip().strip("/")
    images_repo = os.environ.get("IMAGES_REPO") or "publicobs"
    github_branch = os.environ.get("GITHUB_BRANCH") or "main"
    github_api_url = os.environ.get("GITHUB_API_URL", "https://api.github.com")
    raw_content_url = os.environ.get("RAW_CONTENT_URL", "https://raw.githubusercontent.com")
    http_timeout_s = float(os.environ.get("HTTP_TIMEOUT_S", "10"))
    image_cache_max_age = int(os.environ.get("IMAGE_CACHE_MAX_AGE", "86400"))
    site_title = os.environ.get("SITE_TITLE", "ObsidianNotes")
    api_debug_log = os.environ.get("API_DEBUG_LOG", "false").lower() == "true"
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    return Settings(
        github_token=github_token,
        github_owner=github_owner,
        github_repo=github_repo,
        notes_path=notes_path,
        images_repo=images_repo,
        github_branch=github_branch,
        github_api_url=github_api_url,
        raw_content_url=raw_content_url,
        http_timeout_s=http_timeout_s,
        image_cache_max_age=image_cache_max_age,
        site_title=site_title,
        api_debug_log=api_debug_log,
        log_level=log_level,
    )
