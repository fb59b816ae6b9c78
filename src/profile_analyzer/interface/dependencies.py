"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from profile_analyzer.infrastructure.config import get_settings
from profile_analyzer.infrastructure.github_rest_adapter import GitHubRestAdapter
from profile_analyzer.infrastructure.memory_cache import InMemoryTTLCache
from profile_analyzer.services.analyze_profile import AnalyzeProfileUseCase

_http_client: httpx.AsyncClient | None = None
_use_case: AnalyzeProfileUseCase | None = None


async def startup() -> None:
    """Initialise shared resources; called from the lifespan context manager."""
    global _http_client, _use_case  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
        max_repos=settings.max_repos,
        detail_repos=settings.detail_repos,
        commit_repos=settings.commit_repos,
        commits_per_repo=settings.commits_per_repo,
        max_retries=settings.max_retries,
        retry_base_delay=settings.retry_base_delay,
    )
    # The cache outlives requests, so the use case is built once here.
    _use_case = AnalyzeProfileUseCase(
        fetcher=github_adapter,
        cache=InMemoryTTLCache(default_ttl=settings.cache_ttl_seconds),
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _use_case  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _use_case = None


def get_use_case() -> AnalyzeProfileUseCase:
    """Return the process-wide use case with injected adapters."""
    assert _use_case is not None, "startup() was not called"
    return _use_case
