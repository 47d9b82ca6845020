import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from notesite_api.config import Settings
from notesite_api.dependencies import get_contents, get_note_source, get_settings
from notesite_api.domain.entities import NoteMetadata
from notesite_api.domain.exceptions import ContentError, NotAFileError, NotFoundError
from notesite_api.domain.ports import NoteSource
from notesite_api.domain.schemas import NoteDetailOut, NoteListOut, NoteMetadataOut
from notesite_api.github import GitHubContents
from notesite_api.links import raw_file_url
from notesite_api.pages import render_index_page, render_not_found_page, render_note_page
from notesite_api.rendering import render_markdown
from notesite_api.util import image_content_type

router = APIRouter()
logger = logging.getLogger("notesite.api")


def _metadata_out(metadata: NoteMetadata) -> NoteMetadataOut:
    return NoteMetadataOut(**metadata.__dict__)


def _not_found_page(settings: Settings) -> HTMLResponse:
    return HTMLResponse(render_not_found_page(site_title=settings.site_title), status_code=404)


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/", response_class=HTMLResponse)
async def index(
    settings: Settings = Depends(get_settings),
    notes: NoteSource = Depends(get_note_source),
):
    try:
        items = await notes.list_notes()
    except ContentError as e:
        logger.error("notes_list_failed", extra={"error": str(e)})
        items = []
    public = [n for n in items if n.is_public]
    return HTMLResponse(render_index_page(public, site_title=settings.site_title))


@router.get("/notes/{slug}", response_class=HTMLResponse)
async def note_page(
    slug: str,
    settings: Settings = Depends(get_settings),
    notes: NoteSource = Depends(get_note_source),
):
    if not await notes.exists(slug):
        logger.info("note_not_found", extra={"slug": slug})
        return _not_found_page(settings)

    try:
        note = await notes.fetch_note(slug)
    except ContentError as e:
        logger.error("note_fetch_failed", extra={"slug": slug, "error": str(e)})
        return _not_found_page(settings)
    if note is None:
        return _not_found_page(settings)

    body_html = render_markdown(note.content, settings.image_base_url)
    return HTMLResponse(render_note_page(note.metadata, body_html, site_title=settings.site_title))


@router.get("/api/image")
async def image(
    path: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
    contents: GitHubContents = Depends(get_contents),
):
    if not path:
        return PlainTextResponse("Path parameter is required", status_code=400)

    logger.info("image_request", extra={"path": path})
    try:
        data = await contents.fetch_raw(settings.github_owner, settings.images_repo, path)
    except NotFoundError:
        url = raw_file_url(path, settings.image_base_url)
        logger.info("image_redirect", extra={"path": path, "url": url})
        return RedirectResponse(url)
    except NotAFileError:
        return PlainTextResponse("Not an image file", status_code=400)
    except (ContentError, ValueError) as e:
        status = getattr(e, "status_code", 400)
        logger.error("image_fetch_failed", extra={"path": path, "error": str(e), "status": status})
        return PlainTextResponse(f"Error fetching image: {e}", status_code=status)

    return Response(
        content=data,
        media_type=image_content_type(path),
        headers={"Cache-Control": f"public, max-age={settings.image_cache_max_age}"},
    )


@router.get("/api/notes", response_model=NoteListOut)
async def list_notes(notes: NoteSource = Depends(get_note_source)):
    try:
        items = await notes.list_notes()
    except ContentError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return NoteListOut(items=[_metadata_out(n) for n in items if n.is_public])


@router.get("/api/notes/{slug}", response_model=NoteDetailOut)
async def get_note(
    slug: str,
    settings: Settings = Depends(get_settings),
    notes: NoteSource = Depends(get_note_source),
):
    try:
        note = await notes.fetch_note(slug)
    except ContentError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    if note is None:
        raise HTTPException(status_code=404, detail="note_not_found")
    return NoteDetailOut(
        metadata=_metadata_out(note.metadata),
        content_markdown=note.content,
        content_html=render_markdown(note.content, settings.image_base_url),
    )
