"""Analyze-profile use case — the orchestration around the scoring engine.

Depends only on the two ports (:class:`ProfileFetcher` and
:class:`AnalysisCache`) and the pure engine modules.  The interface layer
injects concrete adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from profile_analyzer.domain.entities import ProfileReport, ProfileStats, UserData
from profile_analyzer.domain.exceptions import AnalysisNotFoundError
from profile_analyzer.domain.ports.analysis_cache import AnalysisCache
from profile_analyzer.domain.ports.profile_fetcher import ProfileFetcher
from profile_analyzer.domain.value_objects import GitHubUsername
from profile_analyzer.services.compose_analysis import compute_analysis
from profile_analyzer.services.score_aggregator import calculate_all_scores

logger = logging.getLogger(__name__)


@dataclass
class _LoginGate:
    """Lock for one login plus the number of requests queued on it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


def summarize_stats(user_data: UserData) -> ProfileStats:
    repos = user_data.repositories
    return ProfileStats(
        total_repos=len(repos),
        original_repos=sum(1 for r in repos if not r.is_fork),
        total_stars=sum(r.stars for r in repos),
        total_forks=sum(r.forks for r in repos),
        languages=len(user_data.languages),
    )


class AnalyzeProfileUseCase:
    """Validate → serve from cache or fetch, score, analyse → cache.

    Parameters
    ----------
    fetcher:
        Adapter that resolves a login into a :class:`UserData` snapshot.
    cache:
        Store for finished reports, keyed by ``analysis:<login>``.
    cache_ttl:
        Lifetime in seconds for newly cached reports; ``None`` uses the
        cache's own default.
    """

    def __init__(
        self,
        fetcher: ProfileFetcher,
        cache: AnalysisCache,
        cache_ttl: float | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._gates: dict[str, _LoginGate] = {}

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(self, github_url: str) -> ProfileReport:
        """Return a report for the account named by *github_url*."""
        username = GitHubUsername.from_string(github_url)
        key = username.cache_key

        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Serving cached analysis for %s", username.login)
            return replace(cached, cached=True)

        # At most one fresh computation per login at a time
        gate = self._gates.get(key)
        if gate is None:
            gate = self._gates[key] = _LoginGate()
        gate.users += 1
        try:
            async with gate.lock:
                cached = self._cache.get(key)
                if cached is not None:
                    return replace(cached, cached=True)

                report = await self._analyse(username.login)
                self._cache.set(key, report, self._cache_ttl)
        finally:
            gate.users -= 1
            if gate.users == 0 and self._gates.get(key) is gate:
                del self._gates[key]
        return report

    def get_cached(self, username: str) -> ProfileReport:
        """Return a previously computed report or raise AnalysisNotFoundError."""
        key = f"analysis:{username.strip().lower()}"
        cached = self._cache.get(key)
        if cached is None:
            raise AnalysisNotFoundError(
                "Analysis not found. Please analyze the profile first."
            )
        return replace(cached, cached=True)

    # ── Pipeline ────────────────────────────────────────────────────────

    async def _analyse(self, login: str) -> ProfileReport:
        logger.info("Analyzing profile: %s", login)
        started = time.perf_counter()

        user_data = await self._fetcher.fetch_user_data(login)

        now = datetime.now(timezone.utc)
        scores = calculate_all_scores(user_data, now=now)
        analysis = compute_analysis(user_data, scores=scores, now=now)

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "Analysis complete for %s: %d/100 (%s) in %d ms",
            login,
            scores.overall,
            scores.rating.label,
            duration_ms,
        )
        return ProfileReport(
            profile=user_data.profile,
            scores=scores,
            analysis=analysis,
            stats=summarize_stats(user_data),
            analyzed_at=now,
            analysis_duration_ms=duration_ms,
        )
