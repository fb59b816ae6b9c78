"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
The scoring engine itself raises none of them.
"""

from __future__ import annotations

from datetime import datetime


class ProfileAnalyzerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidUsernameError(ProfileAnalyzerError):
    """The supplied value is not a usable GitHub login or profile URL."""


# ── Cache lookups ───────────────────────────────────────────────────────────


class AnalysisNotFoundError(ProfileAnalyzerError):
    """No cached analysis exists for the requested login."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubApiError(ProfileAnalyzerError):
    """Any non-success answer from the GitHub API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UserNotFoundError(GitHubApiError):
    """The account (or a requested resource of it) does not exist (404)."""


class GitHubAccessDeniedError(GitHubApiError):
    """GitHub refused the request for a reason other than rate limiting (403)."""


class GitHubRateLimitError(GitHubApiError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""

    def __init__(
        self,
        message: str,
        *,
        reset_at: datetime | None = None,
        limit: int | None = None,
        remaining: int | None = 0,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code)
        self.reset_at = reset_at
        self.limit = limit
        self.remaining = remaining


class UpstreamTransientError(GitHubApiError):
    """Network failure or 5xx from GitHub that survived every retry."""
