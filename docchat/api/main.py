from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docchat.api.routes.chat import router as chat_router
from docchat.api.routes.youtube import router as youtube_router
from docchat.config import get_settings
from docchat.exceptions import InvalidRequestError, PersistenceError, VideoNotFoundError
from docchat.services import Services, build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    if getattr(app.state, "services", None) is None:
        app.state.services = build_services(settings)

    video_ids = settings.startup_video_ids()
    if video_ids:
        logger.info("Initializing %d YouTube videos", len(video_ids))
        results = await app.state.services.ingestion.add_videos(video_ids)
        logger.info(
            "YouTube videos initialized: %d ok, %d failed",
            sum(r.ok for r in results),
            sum(not r.ok for r in results),
        )
    yield


async def _invalid_request(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _persistence_failure(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Persistence failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"error": str(exc)})


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


def create_app(services: Services | None = None) -> FastAPI:
    """Build the FastAPI app.

    Pass ``services`` to inject pre-built collaborators (tests do this);
    otherwise they are built from settings when the app starts.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="DocChat API",
        description="RAG-powered documentation chat over docs and YouTube transcripts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_origin_regex=r"https://.*\.vercel\.app|http://localhost:\d+",
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidRequestError, _invalid_request)
    app.add_exception_handler(VideoNotFoundError, _not_found)
    app.add_exception_handler(PersistenceError, _persistence_failure)
    app.add_exception_handler(Exception, _internal_error)

    app.include_router(chat_router)
    app.include_router(youtube_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
