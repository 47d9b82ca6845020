from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse

from notesite_api.config import Settings, load_settings
from notesite_api.github import GitHubContents
from notesite_api.interface.api.routes import router


def create_app(settings: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    settings = settings or load_settings()
    owns_client = http_client is None
    http = http_client or httpx.AsyncClient(timeout=settings.http_timeout_s)

    logger = logging.getLogger("notesite.api")

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(
            "startup",
            extra={
                "owner": settings.github_owner,
                "repo": settings.github_repo,
                "images_repo": settings.images_repo,
                "samples": settings.use_samples,
            },
        )
        yield
        if owns_client:
            await http.aclose()

    app = FastAPI(title="Notesite", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.contents = GitHubContents(http, api_url=settings.github_api_url, token=settings.github_token)

    @app.middleware("http")
    async def request_id_and_logging(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            dt_ms = (time.perf_counter() - start) * 1000.0
            logger.exception("request_error", extra={"rid": request_id, "path": request.url.path, "ms": dt_ms})
            return JSONResponse(
                status_code=500,
                content={"detail": "internal_error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        dt_ms = (time.perf_counter() - start) * 1000.0
        fields = {
            "rid": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "ms": dt_ms,
        }
        if settings.api_debug_log:
            fields["query"] = request.url.query
        logger.info("request", extra=fields)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=app.state.settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)
