"""Dimension scorers — six pure functions mapping fetched data to 0-100.

Every scorer is a sum of independently capped sub-scores, so no single
signal can exceed its point budget.  Empty or missing input is a legitimate
state and scores 0; nothing here raises for sparse data.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Mapping, Sequence

from profile_analyzer.domain.entities import Commit, RepoDetail, Repository
from profile_analyzer.services.numeric import (
    clamp,
    mean,
    months_before,
    round_half_up,
    std_dev,
)

# ── Recognised root-level names ─────────────────────────────────────────────

DOCS_DIRS: frozenset[str] = frozenset({"docs", "documentation"})

MANIFEST_FILES: frozenset[str] = frozenset(
    {
        "package.json", "requirements.txt", "cargo.toml", "pom.xml",
        "build.gradle", "gemfile", "composer.json", "go.mod",
        "pyproject.toml", "setup.py", "cmakelists.txt",
    }
)

STANDARD_DIRS: frozenset[str] = frozenset(
    {"src", "lib", "test", "tests", "spec", "app", "source"}
)

CI_FILES: frozenset[str] = frozenset(
    {".travis.yml", ".circleci", "jenkinsfile", "dockerfile", "docker-compose.yml"}
)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _has_dir(repo: RepoDetail, names: frozenset[str]) -> bool:
    return any(c.type == "dir" and c.name.lower() in names for c in repo.contents)


# ── Documentation ───────────────────────────────────────────────────────────


def _readme_length_points(length: int) -> int:
    if length > 2000:
        return 40
    if length > 1000:
        return 30
    if length > 500:
        return 20
    if length > 200:
        return 10
    return 0


def _documentation_points(repo: RepoDetail) -> int:
    readme = repo.readme
    score = 0
    if readme.exists:
        score += 40
        score += _readme_length_points(readme.length)
        if readme.has_installation:
            score += 5
        if readme.has_usage:
            score += 5
    if _has_dir(repo, DOCS_DIRS):
        score += 10
    if readme.has_contributing:
        score += 10
    return min(score, 100)


def documentation_score(repo_details: Sequence[RepoDetail]) -> int:
    """Mean per-repo README/docs quality across the detailed repositories."""
    if not repo_details:
        return 0
    return round_half_up(mean([_documentation_points(r) for r in repo_details]))


# ── Structure ───────────────────────────────────────────────────────────────


def _structure_points(repo: RepoDetail) -> int:
    names = {c.name.lower() for c in repo.contents}
    score = 0
    if ".gitignore" in names:
        score += 25
    if names & MANIFEST_FILES:
        score += 25
    if _has_dir(repo, STANDARD_DIRS):
        score += 25
    if _has_dir(repo, frozenset({".github"})) or names & CI_FILES:
        score += 25
    return score


def structure_score(repo_details: Sequence[RepoDetail]) -> int:
    """Mean per-repo score for gitignore, manifest, layout and CI signals."""
    if not repo_details:
        return 0
    return round_half_up(mean([_structure_points(r) for r in repo_details]))


# ── Activity ────────────────────────────────────────────────────────────────


def commits_since(commits: Sequence[Commit], since: datetime) -> list[Commit]:
    """Commits with a known author date at or after *since*."""
    return [c for c in commits if c.authored_at is not None and c.authored_at >= since]


def weekly_buckets(commits: Sequence[Commit]) -> dict[str, int]:
    """Coarse weekly histogram keyed by ``<year>-W<ceil(day-of-month / 7)>``.

    The key ignores the month, so the same week-of-month in different months
    shares a bucket.
    """
    counter: Counter[str] = Counter()
    for commit in commits:
        if commit.authored_at is None:
            continue
        when = commit.authored_at
        counter[f"{when.year}-W{math.ceil(when.day / 7)}"] += 1
    return dict(counter)


def _recency_points(last_30_days: int) -> int:
    if last_30_days > 20:
        return 30
    if last_30_days > 10:
        return 25
    if last_30_days > 5:
        return 20
    if last_30_days > 0:
        return 10
    return 0


def _frequency_points(avg_weekly: float) -> int:
    if avg_weekly >= 10:
        return 40
    if avg_weekly >= 5:
        return 30
    if avg_weekly >= 2:
        return 20
    if avg_weekly >= 1:
        return 10
    return 0


def _consistency_points(weekly_values: Sequence[int]) -> int:
    if len(weekly_values) > 1:
        avg = mean(weekly_values)
        consistency = max(0.0, 1 - std_dev(weekly_values) / (avg + 1))
        return round_half_up(consistency * 30)
    if len(weekly_values) == 1:
        return 15
    return 0


def activity_score(
    commits: Sequence[Commit],
    repositories: Sequence[Repository],
    now: datetime | None = None,
) -> int:
    """Recency (30) + frequency (40) + consistency (30) of the commit sample."""
    if not commits and not repositories:
        return 0

    current = _now(now)
    recent = commits_since(commits, months_before(current, 6))
    weekly_values = list(weekly_buckets(recent).values())
    last_30 = commits_since(commits, current - timedelta(days=30))

    avg_weekly = mean(weekly_values) if weekly_values else 0.0

    score = (
        _recency_points(len(last_30))
        + _frequency_points(avg_weekly)
        + _consistency_points(weekly_values)
    )
    return min(score, 100)


# ── Organization ────────────────────────────────────────────────────────────


def has_meaningful_description(repo: Repository) -> bool:
    return len(repo.description or "") > 20


def organization_score(repositories: Sequence[Repository]) -> int:
    """Share of originals, described, tagged and licensed repos (25 each)."""
    if not repositories:
        return 0

    total = len(repositories)

    def _share(count: int) -> int:
        return round_half_up(count / total * 25)

    score = (
        _share(sum(1 for r in repositories if not r.is_fork))
        + _share(sum(1 for r in repositories if has_meaningful_description(r)))
        + _share(sum(1 for r in repositories if r.topics))
        + _share(sum(1 for r in repositories if r.license))
    )
    return min(score, 100)


# ── Impact ──────────────────────────────────────────────────────────────────


def impact_score(repositories: Sequence[Repository]) -> int:
    """Log-scaled stars (40) and forks (30) plus 30 for any live homepage."""
    if not repositories:
        return 0

    total_stars = sum(r.stars for r in repositories)
    total_forks = sum(r.forks for r in repositories)
    has_homepage = any(r.homepage for r in repositories)

    score = round_half_up(min(math.log10(total_stars + 1) * 13, 40))
    score += round_half_up(min(math.log10(total_forks + 1) * 15, 30))
    if has_homepage:
        score += 30
    return min(score, 100)


# ── Technical depth ─────────────────────────────────────────────────────────


def _language_points(language_count: int) -> int:
    if language_count >= 6:
        return 60
    if language_count >= 4:
        return 45
    if language_count >= 3:
        return 35
    if language_count >= 2:
        return 25
    return 15


def _size_points(avg_size: float) -> int:
    if avg_size > 5000:
        return 40
    if avg_size > 2000:
        return 30
    if avg_size > 1000:
        return 20
    if avg_size > 500:
        return 10
    return 0


def technical_score(
    repositories: Sequence[Repository],
    languages: Mapping[str, int],
) -> int:
    """Language breadth (60) plus average repository size (40)."""
    if not repositories:
        return 0

    avg_size = sum(r.size for r in repositories) / len(repositories)
    score = _language_points(len(languages or {})) + _size_points(avg_size)
    return clamp(score)
