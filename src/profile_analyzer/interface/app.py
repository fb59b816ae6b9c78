"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from profile_analyzer.infrastructure.config import Settings, get_settings
from profile_analyzer.interface.dependencies import shutdown, startup
from profile_analyzer.interface.error_handlers import register_error_handlers
from profile_analyzer.interface.routes import API_VERSION, router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    await startup()
    if settings.github_token is None:
        logger.warning("GitHub API: unauthenticated (60 req/hour); set GITHUB_TOKEN to raise it")
    else:
        logger.info("GitHub API: authenticated (5000 req/hour)")
    yield
    await shutdown()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the profile analyzer API.

    ``settings`` only drives app-level wiring (CORS); the GitHub client and
    cache are built from :func:`get_settings` when the lifespan starts.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="GitHub Profile Analyzer",
        version=API_VERSION,
        description=(
            "Scores a public GitHub profile from 0 to 100 across six "
            "dimensions and explains the score with strengths, red flags "
            "and prioritised recommendations."
        ),
        lifespan=_lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)
    app.include_router(router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {
            "status": "ok",
            "version": API_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app
