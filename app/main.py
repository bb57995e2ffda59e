"""FastAPI application entry point for the architecture analysis proxy."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, get_settings
from app.middleware import RequestIDMiddleware
from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.logging import setup_logging
from arch_snapshot.core.proxy import handle

logger = logging.getLogger(__name__)

ARCHITECTURE_PATH = "/api/architecture"


def _load_settings_safe() -> Settings | None:
    """Load settings, returning None when config is unavailable (e.g. tests)."""
    try:
        return get_settings()
    except ValueError:
        return None


def _load_snapshot_config() -> SnapshotConfig | None:
    """Load the per-request core config; None signals a broken configuration."""
    try:
        return get_settings().snapshot_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return None


def create_app() -> FastAPI:
    """Build and return the FastAPI application with all middleware configured."""
    settings = _load_settings_safe()

    if settings is not None:
        setup_logging(settings.log_level)

    application = FastAPI(
        title="Architecture Snapshot",
        description="Proxy that turns a directory tree or architecture description into a schema-constrained review",
        version=__version__,
    )

    # Middleware stack (outermost is added last)
    # CORS, configured from environment
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list if settings else [],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request ID, assigned before anything else
    application.add_middleware(RequestIDMiddleware)

    return application


app = create_app()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True, "version": __version__}


@app.api_route(ARCHITECTURE_PATH, methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"])
async def architecture(request: Request) -> JSONResponse:
    """
    Analyze a directory tree or architecture description.

    Accepts a JSON body {type?, content} and answers with the normalized
    AnalysisResult or {"error": ...}. Verbs other than POST are answered
    with 405 and an Allow header.
    """
    body = await request.body()
    result = await handle(request.method, body, _load_snapshot_config())
    return JSONResponse(
        status_code=result.status,
        content=result.body,
        headers=result.headers,
    )
