from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docchat.core.config import Settings, load_settings
from docchat.services.http import create_http_client
from docchat.services.llm import create_chat_client
from docchat.services.ocr import OcrClient
from docchat.services.search import SearchClient
from docchat.services.storage import BlobStorage
from docchat.utils.logging import get_logger, setup_logging

from docchat.api.chat import router as chat_router
from docchat.api.uploads import router as uploads_router

logger = get_logger("docchat.main")

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    search_client: SearchClient | None = None,
    chat_client: Any | None = None,
    storage: BlobStorage | None = None,
    ocr_client: OcrClient | None = None,
) -> FastAPI:
    """
    Build the application.

    Settings are validated here, before any route is registered: missing
    required configuration exits the process with status 1. Collaborator
    clients are created once and shared by all requests; any of them can
    be passed in instead (tests inject fakes).
    """
    if settings is None:
        settings = load_settings()
    setup_logging(settings.log_level)

    owns_http_client = http_client is None
    if http_client is None:
        http_client = create_http_client(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Chat over documents indexed in Azure Cognitive Search",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.search_client = search_client or SearchClient(settings, http_client)
    app.state.chat_client = chat_client or create_chat_client(settings, http_client)
    app.state.storage = storage or BlobStorage(settings)
    app.state.ocr_client = ocr_client or OcrClient(settings, http_client)

    app.include_router(chat_router)
    app.include_router(uploads_router)

    # ── Error shapes: every error body is {"error": "..."} ──────────
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected invalid request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "A server error occurred"},
        )

    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting %s (environment=%s)", settings.app_name, settings.environment)
        if not settings.ocr_configured:
            logger.warning("Azure Computer Vision not configured; image OCR disabled")

    @app.on_event("shutdown")
    async def on_shutdown():
        logger.info("Shutting down %s...", settings.app_name)
        if owns_http_client:
            await http_client.aclose()
        if storage is None:
            app.state.storage.close()
        logger.info("[OK] Shutdown complete")

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "service": "docchat"}

    @app.get("/", include_in_schema=False)
    def root():
        """Static landing page."""
        return FileResponse(STATIC_DIR / "index.html")

    return app
