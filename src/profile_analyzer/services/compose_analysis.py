"""Analysis composer — the engine's single entry point.

Pure and synchronous: given the same snapshot and ``now`` it always yields the
same result, and it never touches the network or the cache.
"""

from __future__ import annotations

from datetime import datetime, timezone

from profile_analyzer.domain.entities import AnalysisResult, ScoreResult, UserData
from profile_analyzer.services.analytics import (
    analyze_commit_patterns,
    analyze_languages,
    generate_repository_insights,
)
from profile_analyzer.services.insights import (
    generate_recommendations,
    generate_red_flags,
    generate_strengths,
)
from profile_analyzer.services.score_aggregator import calculate_all_scores


def compute_analysis(
    user_data: UserData,
    scores: ScoreResult | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Derive insights and analytics for *user_data*.

    ``scores`` may be passed when the caller already ran
    :func:`calculate_all_scores`; otherwise they are computed here.
    """
    current = now if now is not None else datetime.now(timezone.utc)
    if scores is None:
        scores = calculate_all_scores(user_data, now=current)
    dimensions = scores.dimensions

    return AnalysisResult(
        strengths=tuple(generate_strengths(dimensions, user_data, now=current)),
        red_flags=tuple(generate_red_flags(dimensions, user_data, now=current)),
        recommendations=tuple(
            generate_recommendations(dimensions, user_data, now=current)
        ),
        commit_patterns=analyze_commit_patterns(user_data.commits, now=current),
        language_analysis=analyze_languages(user_data.languages),
        repository_insights=tuple(generate_repository_insights(user_data.repo_details)),
        generated_at=current,
    )
