"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """How serious a red flag is."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Priority(str, Enum):
    """Urgency bucket for a recommendation."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ── Input aggregate ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Profile:
    """Public identity of a GitHub account."""

    username: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    blog: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    profile_url: str | None = None
    created_at: datetime | None = None
    has_profile_readme: bool = False


@dataclass(frozen=True, slots=True)
class Repository:
    """A repository as listed by ``GET /users/{user}/repos``."""

    id: int
    name: str
    full_name: str = ""
    description: str | None = None
    url: str | None = None
    homepage: str | None = None
    is_fork: bool = False
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    language: str | None = None
    topics: tuple[str, ...] = ()
    license: str | None = None
    size: int = 0  # KB, as reported by GitHub
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ReadmeInfo:
    """What we learned from a repository README without keeping its text."""

    exists: bool = False
    length: int = 0
    has_installation: bool = False
    has_usage: bool = False
    has_contributing: bool = False
    has_license: bool = False

    @classmethod
    def from_text(cls, text: str) -> ReadmeInfo:
        lower = text.lower()
        return cls(
            exists=True,
            length=len(text),
            has_installation="install" in lower,
            has_usage="usage" in lower,
            has_contributing="contributing" in lower,
            has_license="license" in lower,
        )


@dataclass(frozen=True, slots=True)
class ContentEntry:
    """A single root-directory entry from the contents API."""

    name: str
    type: str  # "file" or "dir"
    size: int = 0


@dataclass(frozen=True, slots=True)
class RepoDetail(Repository):
    """A repository augmented with README, language bytes and root listing."""

    readme: ReadmeInfo = field(default_factory=ReadmeInfo)
    languages: dict[str, int] = field(default_factory=dict)
    contents: tuple[ContentEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class Commit:
    """A sampled commit from one of the user's top repositories."""

    sha: str
    message: str = ""
    author: str | None = None
    email: str | None = None
    authored_at: datetime | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class UserData:
    """Immutable snapshot of everything fetched for one account."""

    profile: Profile
    repositories: tuple[Repository, ...] = ()
    repo_details: tuple[RepoDetail, ...] = ()
    commits: tuple[Commit, ...] = ()
    languages: dict[str, int] = field(default_factory=dict)
    fetched_at: datetime | None = None


# ── Scores ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DimensionScores:
    """The six independently scored quality axes (each 0-100)."""

    documentation: int = 0
    structure: int = 0
    activity: int = 0
    organization: int = 0
    impact: int = 0
    technical: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "documentation": self.documentation,
            "structure": self.structure,
            "activity": self.activity,
            "organization": self.organization,
            "impact": self.impact,
            "technical": self.technical,
        }


@dataclass(frozen=True, slots=True)
class Rating:
    """Qualitative tier derived from the overall score."""

    label: str
    description: str
    color: str


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    raw: dict[str, int]
    weighted: dict[str, int]


@dataclass(frozen=True, slots=True)
class ScoreResult:
    overall: int
    rating: Rating
    dimensions: DimensionScores
    breakdown: ScoreBreakdown
    weights: dict[str, float]


# ── Insights ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Strength:
    category: str
    title: str
    description: str
    icon: str


@dataclass(frozen=True, slots=True)
class RedFlag:
    category: str
    title: str
    description: str
    severity: Severity
    icon: str


@dataclass(frozen=True, slots=True)
class Recommendation:
    priority: Priority
    category: str
    title: str
    description: str
    impact: str
    icon: str
    action: str | None = None


@dataclass(frozen=True, slots=True)
class WeeklyCommits:
    week: str  # ISO date of the bucket start
    commits: int


@dataclass(frozen=True, slots=True)
class DayCount:
    day: str
    count: int


@dataclass(frozen=True, slots=True)
class CommitPatterns:
    """Time-series view of the commit sample."""

    total_commits: int
    average_per_week: float
    most_active_day: str | None
    activity_trend: str  # increasing | decreasing | stable | no-data
    weekly_data: tuple[WeeklyCommits, ...] = ()
    day_of_week_distribution: tuple[DayCount, ...] = ()


@dataclass(frozen=True, slots=True)
class LanguageShare:
    name: str
    count: int
    percentage: int


@dataclass(frozen=True, slots=True)
class LanguageAnalysis:
    total_languages: int
    primary_language: str | None
    distribution: tuple[LanguageShare, ...]
    diversity_score: int


@dataclass(frozen=True, slots=True)
class RepoBadge:
    type: str  # success | warning | info
    text: str


@dataclass(frozen=True, slots=True)
class RepositoryInsight:
    name: str
    url: str | None
    stars: int
    forks: int
    language: str | None
    updated_at: datetime | None
    score: int
    insights: tuple[RepoBadge, ...]


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything the engine derives from one :class:`UserData` snapshot."""

    strengths: tuple[Strength, ...]
    red_flags: tuple[RedFlag, ...]
    recommendations: tuple[Recommendation, ...]
    commit_patterns: CommitPatterns
    language_analysis: LanguageAnalysis
    repository_insights: tuple[RepositoryInsight, ...]
    generated_at: datetime


# ── Serving-level report ────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ProfileStats:
    total_repos: int
    original_repos: int
    total_stars: int
    total_forks: int
    languages: int


@dataclass(frozen=True, slots=True)
class ProfileReport:
    """The cached unit: profile summary, scores and analysis for one login."""

    profile: Profile
    scores: ScoreResult
    analysis: AnalysisResult
    stats: ProfileStats
    analyzed_at: datetime
    analysis_duration_ms: int
    cached: bool = False
