"""
FastAPI application serving random transcripts.

Routes:
- ``GET /``: up to ``limit`` random transcripts joined with speaker metadata,
  skipping the speaker/sequence pairs named in ``excluded``.
- ``GET /favicon.ico``: empty 204 with a long-lived cache header.
- ``OPTIONS`` on any path: empty 204; CORS headers come from the middleware.

Every error body is ``{"error": <message>}``: 400 carries the validator's
message verbatim, unknown routes and methods get 404, and row store failures
get a generic 500 while the cause is logged here.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from englitune import __version__
from englitune.config import Settings, get_settings
from englitune.domain.errors import StoreError
from englitune.domain.models import OutputRecord
from englitune.infrastructure.db_factory import PoolManager
from englitune.queries.executor import RowStore, get_random_transcripts_with_speaker
from englitune.utils.logging import get_logger
from englitune.validation.pipeline import validate
from englitune.validation.result import Err

log = get_logger(__name__)

ALLOWED_METHODS = ["GET", "OPTIONS"]
FAVICON_CACHE_CONTROL = "public, max-age=604800, immutable"
NOT_FOUND_MESSAGE = "Not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_row_store(request: Request) -> RowStore:
    """Dependency returning the row store installed on the app."""
    return request.app.state.row_store


def create_app(settings: Optional[Settings] = None, row_store: Optional[RowStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    settings : Settings, optional
        Configuration; defaults to the cached environment settings.
    row_store : RowStore, optional
        Row store to serve from. When omitted, a psycopg pool is opened on
        startup and closed on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if row_store is not None:
            yield
            return
        manager = PoolManager(settings)
        await manager.open()
        app.state.row_store = manager.row_store()
        try:
            yield
        finally:
            await manager.close()

    app = FastAPI(
        lifespan=lifespan,
        title="englitune",
        description="Random transcripts from a speaker-annotated speech corpus.",
        version=__version__,
    )
    app.state.row_store = row_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=ALLOWED_METHODS,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Wrong method on a known path reads as "no such route" to clients.
        if exc.status_code in (404, 405):
            return _error(NOT_FOUND_MESSAGE, 404)
        return _error(str(exc.detail), exc.status_code)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> JSONResponse:
        log.error("Row store failure on %s: %r", request.url.path, exc.__cause__ or exc, exc_info=exc)
        return _error(INTERNAL_ERROR_MESSAGE, 500)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        log.error("Unhandled error on %s: %r", request.url.path, exc, exc_info=exc)
        return _error(INTERNAL_ERROR_MESSAGE, 500)

    @app.options("/{path:path}", include_in_schema=False)
    async def options(path: str) -> Response:
        return Response(status_code=204)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> Response:
        return Response(status_code=204, headers={"Cache-Control": FAVICON_CACHE_CONTROL})

    @app.get(
        "/",
        response_model=List[OutputRecord],
        responses={400: {"description": "Invalid 'limit' or 'excluded' parameter"}},
    )
    async def random_transcripts(
        limit: Optional[str] = Query(None, description="Number of rows to return (1-100, default 1)."),
        excluded: Optional[str] = Query(
            None,
            description="Speaker/sequence pairs to skip, e.g. p225=001,002;p226=003.",
        ),
        store: RowStore = Depends(get_row_store),
    ):
        result = validate(limit, excluded)
        if isinstance(result, Err):
            log.info("Rejected query: %s", result.message, extra={"kind": result.kind.value})
            return _error(result.message, 400)
        params = result.value
        log.info(
            "Sampling transcripts",
            extra={"limit": params.limit, "excluded_speakers": len(params.excluded)},
        )
        return await get_random_transcripts_with_speaker(store, params.limit, params.excluded)

    return app


__all__ = ["create_app", "get_row_store"]
