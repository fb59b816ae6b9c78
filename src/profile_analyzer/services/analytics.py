"""Commit-pattern, language and per-repository analytics."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Mapping, Sequence

from profile_analyzer.domain.entities import (
    Commit,
    CommitPatterns,
    DayCount,
    LanguageAnalysis,
    LanguageShare,
    RepoBadge,
    RepoDetail,
    RepositoryInsight,
    WeeklyCommits,
)
from profile_analyzer.services.numeric import mean, round_half_up

TRAILING_WEEKS = 12
TOP_LANGUAGES = 8

# Sunday first, matching the day-of-week index used by the dashboard.
WEEKDAYS: tuple[str, ...] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

NO_COMMIT_DATA = CommitPatterns(
    total_commits=0,
    average_per_week=0.0,
    most_active_day=None,
    activity_trend="no-data",
)

NO_LANGUAGE_DATA = LanguageAnalysis(
    total_languages=0,
    primary_language=None,
    distribution=(),
    diversity_score=0,
)


# ── Commit patterns ─────────────────────────────────────────────────────────


def _weekly_series(commits: Sequence[Commit], now: datetime) -> list[WeeklyCommits]:
    """Twelve 7-day buckets, oldest first, each starting at midnight."""
    dated = [c.authored_at for c in commits if c.authored_at is not None]
    series: list[WeeklyCommits] = []
    for weeks_back in range(TRAILING_WEEKS - 1, -1, -1):
        start = (now - timedelta(weeks=weeks_back)).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        end = start + timedelta(days=7)
        count = sum(1 for when in dated if start <= when < end)
        series.append(WeeklyCommits(week=start.date().isoformat(), commits=count))
    return series


def _sunday_index(when: datetime) -> int:
    return (when.weekday() + 1) % 7


def _classify_trend(series: Sequence[WeeklyCommits]) -> str:
    half = len(series) // 2
    first = sum(w.commits for w in series[:half])
    second = sum(w.commits for w in series[half:])
    if second > first * 1.3:
        return "increasing"
    if second < first * 0.7:
        return "decreasing"
    return "stable"


def analyze_commit_patterns(
    commits: Sequence[Commit], now: datetime | None = None
) -> CommitPatterns:
    """Summarise the commit sample as a trailing weekly series and weekday mix.

    An empty sample yields :data:`NO_COMMIT_DATA` rather than an error.
    """
    if not commits:
        return NO_COMMIT_DATA

    current = now if now is not None else datetime.now(timezone.utc)
    series = _weekly_series(commits, current)

    by_day = Counter(
        _sunday_index(c.authored_at) for c in commits if c.authored_at is not None
    )
    day_counts = tuple(DayCount(day=name, count=by_day[i]) for i, name in enumerate(WEEKDAYS))

    most_active = day_counts[0]
    for entry in day_counts[1:]:
        if entry.count > most_active.count:
            most_active = entry

    return CommitPatterns(
        total_commits=len(commits),
        average_per_week=round_half_up(mean([w.commits for w in series]) * 10) / 10,
        most_active_day=most_active.day,
        activity_trend=_classify_trend(series),
        weekly_data=tuple(series),
        day_of_week_distribution=day_counts,
    )


# ── Languages ───────────────────────────────────────────────────────────────


def analyze_languages(languages: Mapping[str, int]) -> LanguageAnalysis:
    """Share of repositories per primary language, top eight first.

    ``diversity_score`` saturates linearly at ten languages; it is a simple
    count proxy, not an entropy measure.
    """
    if not languages:
        return NO_LANGUAGE_DATA

    total = sum(languages.values())
    distribution = sorted(
        (
            LanguageShare(
                name=name,
                count=count,
                percentage=round_half_up(count / total * 100) if total else 0,
            )
            for name, count in languages.items()
        ),
        key=lambda share: share.count,
        reverse=True,
    )

    return LanguageAnalysis(
        total_languages=len(languages),
        primary_language=distribution[0].name,
        distribution=tuple(distribution[:TOP_LANGUAGES]),
        diversity_score=min(len(languages) * 10, 100),
    )


# ── Per-repository insights ─────────────────────────────────────────────────


def _badges(repo: RepoDetail) -> tuple[RepoBadge, ...]:
    badges: list[RepoBadge] = []
    if repo.stars >= 50:
        badges.append(RepoBadge("success", "Popular project"))
    if not repo.readme.exists:
        badges.append(RepoBadge("warning", "Missing README"))
    if repo.is_fork:
        badges.append(RepoBadge("info", "Forked repository"))
    if repo.license:
        badges.append(RepoBadge("success", "Has license"))
    if repo.topics:
        badges.append(RepoBadge("info", f"{len(repo.topics)} topics"))
    return tuple(badges)


def repository_score(repo: RepoDetail) -> int:
    score = 0
    if repo.readme.exists:
        score += 40
    if repo.readme.length > 500:
        score += 20
    if repo.license:
        score += 15
    if repo.topics:
        score += 15
    if repo.description:
        score += 10
    return min(score, 100)


def generate_repository_insights(
    repo_details: Sequence[RepoDetail],
) -> list[RepositoryInsight]:
    """Badge and score each detailed repository, most starred first."""
    insights = [
        RepositoryInsight(
            name=repo.name,
            url=repo.url,
            stars=repo.stars,
            forks=repo.forks,
            language=repo.language,
            updated_at=repo.updated_at,
            score=repository_score(repo),
            insights=_badges(repo),
        )
        for repo in repo_details
    ]
    insights.sort(key=lambda i: i.stars, reverse=True)
    return insights
