"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from profile_analyzer.domain.entities import Priority, Severity


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /api/analyze``."""

    github_url: str

    @field_validator("github_url")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        return stripped


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ── Report pieces ───────────────────────────────────────────────────────────


class ProfileOut(_FromDomain):
    username: str
    name: str | None
    avatar_url: str | None
    bio: str | None
    location: str | None
    company: str | None
    blog: str | None
    followers: int
    following: int
    public_repos: int
    profile_url: str | None
    has_profile_readme: bool
    created_at: datetime | None


class RatingOut(_FromDomain):
    label: str
    description: str
    color: str


class DimensionsOut(_FromDomain):
    documentation: int
    structure: int
    activity: int
    organization: int
    impact: int
    technical: int


class BreakdownOut(_FromDomain):
    raw: dict[str, int]
    weighted: dict[str, int]


class ScoresOut(_FromDomain):
    overall: int
    rating: RatingOut
    dimensions: DimensionsOut
    breakdown: BreakdownOut
    weights: dict[str, float]


class StrengthOut(_FromDomain):
    category: str
    title: str
    description: str
    icon: str


class RedFlagOut(_FromDomain):
    category: str
    title: str
    description: str
    severity: Severity
    icon: str


class RecommendationOut(_FromDomain):
    priority: Priority
    category: str
    title: str
    description: str
    impact: str
    icon: str
    action: str | None = None


class WeeklyCommitsOut(_FromDomain):
    week: str
    commits: int


class DayCountOut(_FromDomain):
    day: str
    count: int


class CommitPatternsOut(_FromDomain):
    total_commits: int
    average_per_week: float
    most_active_day: str | None
    activity_trend: str
    weekly_data: list[WeeklyCommitsOut]
    day_of_week_distribution: list[DayCountOut]


class LanguageShareOut(_FromDomain):
    name: str
    count: int
    percentage: int


class LanguageAnalysisOut(_FromDomain):
    total_languages: int
    primary_language: str | None
    distribution: list[LanguageShareOut]
    diversity_score: int


class RepoBadgeOut(_FromDomain):
    type: str
    text: str


class RepositoryInsightOut(_FromDomain):
    name: str
    url: str | None
    stars: int
    forks: int
    language: str | None
    updated_at: datetime | None
    score: int
    insights: list[RepoBadgeOut]


class AnalysisOut(_FromDomain):
    strengths: list[StrengthOut]
    red_flags: list[RedFlagOut]
    recommendations: list[RecommendationOut]
    commit_patterns: CommitPatternsOut
    language_analysis: LanguageAnalysisOut
    repository_insights: list[RepositoryInsightOut]
    generated_at: datetime


class StatsOut(_FromDomain):
    total_repos: int
    original_repos: int
    total_stars: int
    total_forks: int
    languages: int


class ReportResponse(_FromDomain):
    """Successful response from ``POST /api/analyze`` and ``GET /api/analysis``."""

    profile: ProfileOut
    scores: ScoresOut
    analysis: AnalysisOut
    stats: StatsOut
    analyzed_at: datetime
    analysis_duration_ms: int
    cached: bool


# ── Service metadata ────────────────────────────────────────────────────────


class RateLimitInfo(BaseModel):
    authenticated: bool
    requests_per_hour: int


class StatusResponse(BaseModel):
    status: str = "operational"
    version: str
    github_api: RateLimitInfo


class ExampleProfile(BaseModel):
    username: str
    name: str
    description: str
    expected_score: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
    details: dict[str, object] | None = None
