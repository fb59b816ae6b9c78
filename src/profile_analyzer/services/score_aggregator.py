"""Score aggregation — weighted overall score and rating tier."""

from __future__ import annotations

from datetime import datetime

from profile_analyzer.domain.entities import (
    DimensionScores,
    Rating,
    ScoreBreakdown,
    ScoreResult,
    UserData,
)
from profile_analyzer.services.dimension_scorers import (
    activity_score,
    documentation_score,
    impact_score,
    organization_score,
    structure_score,
    technical_score,
)
from profile_analyzer.services.numeric import round_half_up

# ── Weight constants ────────────────────────────────────────────────────────

DIMENSION_WEIGHTS: dict[str, float] = {
    "documentation": 0.20,
    "structure": 0.20,
    "activity": 0.15,
    "organization": 0.15,
    "impact": 0.15,
    "technical": 0.15,
}

# Evaluated high to low; first threshold met wins.
RATING_TIERS: tuple[tuple[int, Rating], ...] = (
    (90, Rating("Excellent", "Outstanding portfolio, ready for top-tier opportunities", "#10B981")),
    (75, Rating("Strong", "Good foundation with minor improvements needed", "#3B82F6")),
    (50, Rating("Average", "Decent but needs significant work to stand out", "#F59E0B")),
    (25, Rating("Weak", "Major gaps identified, prioritize improvements", "#EF4444")),
)
CRITICAL_RATING = Rating("Critical", "Portfolio requires substantial overhaul", "#DC2626")


def get_rating(score: int) -> Rating:
    """Return the tier for *score*; boundaries are inclusive from above."""
    for threshold, rating in RATING_TIERS:
        if score >= threshold:
            return rating
    return CRITICAL_RATING


def weighted_scores(dimensions: DimensionScores) -> dict[str, int]:
    raw = dimensions.as_dict()
    return {
        name: round_half_up(raw[name] * weight)
        for name, weight in DIMENSION_WEIGHTS.items()
    }


def overall_score(dimensions: DimensionScores) -> int:
    """Sum of rounded weighted contributions, capped at 100."""
    return min(sum(weighted_scores(dimensions).values()), 100)


def score_dimensions(user_data: UserData, now: datetime | None = None) -> DimensionScores:
    """Run all six scorers over one snapshot."""
    return DimensionScores(
        documentation=documentation_score(user_data.repo_details),
        structure=structure_score(user_data.repo_details),
        activity=activity_score(user_data.commits, user_data.repositories, now=now),
        organization=organization_score(user_data.repositories),
        impact=impact_score(user_data.repositories),
        technical=technical_score(user_data.repositories, user_data.languages),
    )


def build_score_result(dimensions: DimensionScores) -> ScoreResult:
    weighted = weighted_scores(dimensions)
    overall = overall_score(dimensions)
    return ScoreResult(
        overall=overall,
        rating=get_rating(overall),
        dimensions=dimensions,
        breakdown=ScoreBreakdown(raw=dimensions.as_dict(), weighted=weighted),
        weights=dict(DIMENSION_WEIGHTS),
    )


def calculate_all_scores(user_data: UserData, now: datetime | None = None) -> ScoreResult:
    """Score every dimension and aggregate into a :class:`ScoreResult`."""
    return build_score_result(score_dimensions(user_data, now=now))
