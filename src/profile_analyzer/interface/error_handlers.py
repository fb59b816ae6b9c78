"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "...", "details": ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from profile_analyzer.domain.exceptions import (
    AnalysisNotFoundError,
    GitHubAccessDeniedError,
    GitHubApiError,
    GitHubRateLimitError,
    InvalidUsernameError,
    ProfileAnalyzerError,
    UpstreamTransientError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[ProfileAnalyzerError], int]] = [
    (InvalidUsernameError, 400),
    (UserNotFoundError, 404),
    (AnalysisNotFoundError, 404),
    (GitHubAccessDeniedError, 403),
    (UpstreamTransientError, 503),
    (GitHubApiError, 502),
]


def _error_json(status_code: int, message: str, details: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"status": "error", "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    @app.exception_handler(GitHubRateLimitError)
    async def rate_limit_handler(
        request: Request, exc: GitHubRateLimitError
    ) -> JSONResponse:
        logger.warning("GitHub rate limit hit; resets at %s", exc.reset_at)
        return _error_json(
            429,
            "GitHub API rate limit exceeded.",
            details={
                "message": "Please try again later or add a GitHub token for higher limits.",
                "reset_at": exc.reset_at.isoformat() if exc.reset_at else None,
                "limit": exc.limit,
                "remaining": exc.remaining,
            },
        )

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
