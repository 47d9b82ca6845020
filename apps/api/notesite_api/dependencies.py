from fastapi import Depends, Request

from notesite_api.config import Settings
from notesite_api.domain.ports import NoteSource
from notesite_api.github import GitHubContents
from notesite_api.notes import GitHubNoteSource
from notesite_api.samples import SampleNoteSource


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_contents(request: Request) -> GitHubContents:
    return request.app.state.contents


def get_note_source(
    settings: Settings = Depends(get_settings),
    contents: GitHubContents = Depends(get_contents),
) -> NoteSource:
    if settings.use_samples:
        return SampleNoteSource()
    return GitHubNoteSource(
        contents,
        owner=settings.github_owner,
        repo=settings.github_repo,
        notes_path=settings.notes_path,
    )
