"""Insight generators — strengths, red flags and recommendations.

Each generator is a declared sequence of ``(predicate, builder)`` rules.
All rules are evaluated, matches are collected in declaration order, and any
truncation or sorting happens afterwards as a separate pass.  Rule order is
therefore part of the output contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Sequence, TypeVar

from profile_analyzer.domain.entities import (
    DimensionScores,
    Priority,
    Recommendation,
    RedFlag,
    Repository,
    Severity,
    Strength,
    UserData,
)
from profile_analyzer.services.dimension_scorers import commits_since
from profile_analyzer.services.numeric import format_count, months_before

MAX_STRENGTHS = 5
POPULAR_REPO_STARS = 50

PRIORITY_RANK: dict[Priority, int] = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


@dataclass(frozen=True)
class RuleContext:
    """Inputs every rule may look at."""

    scores: DimensionScores
    data: UserData
    now: datetime

    @property
    def repositories(self) -> Sequence[Repository]:
        return self.data.repositories


T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[T]):
    when: Callable[[RuleContext], bool]
    build: Callable[[RuleContext], T]


def evaluate(rules: Sequence[Rule[T]], ctx: RuleContext) -> list[T]:
    """Build an insight for every rule whose predicate holds, in rule order."""
    return [rule.build(ctx) for rule in rules if rule.when(ctx)]


def _context(
    scores: DimensionScores, data: UserData, now: datetime | None
) -> RuleContext:
    return RuleContext(
        scores=scores,
        data=data,
        now=now if now is not None else datetime.now(timezone.utc),
    )


# ── Shared derived facts ────────────────────────────────────────────────────


def _repos_without_readme(ctx: RuleContext) -> int:
    return sum(1 for r in ctx.data.repo_details if not r.readme.exists)


def _commits_last_6_months(ctx: RuleContext) -> int:
    return len(commits_since(ctx.data.commits, months_before(ctx.now, 6)))


def _repos_missing_description(ctx: RuleContext) -> int:
    return sum(1 for r in ctx.repositories if not r.description)


def _repos_missing_topics(ctx: RuleContext) -> int:
    return sum(1 for r in ctx.repositories if not r.topics)


def _popular_repos(ctx: RuleContext) -> list[Repository]:
    return [r for r in ctx.repositories if r.stars >= POPULAR_REPO_STARS]


# ── Strengths ───────────────────────────────────────────────────────────────


def _activity_strength(ctx: RuleContext) -> Strength:
    recent = len(commits_since(ctx.data.commits, ctx.now - timedelta(days=30)))
    return Strength(
        category="Activity",
        title="Consistent Development Activity",
        description=(
            f"You've maintained excellent commit consistency with {recent} commits "
            "in the last 30 days. This shows dedication and reliability."
        ),
        icon="clock",
    )


def _organization_strength(ctx: RuleContext) -> Strength:
    originals = sum(1 for r in ctx.repositories if not r.is_fork)
    return Strength(
        category="Organization",
        title="Well-Organized Repository Portfolio",
        description=(
            f"{originals} original repositories with proper descriptions, topics, "
            "and licenses demonstrate attention to detail."
        ),
        icon="folder",
    )


def _impact_strength(ctx: RuleContext) -> Strength:
    stars = sum(r.stars for r in ctx.repositories)
    forks = sum(r.forks for r in ctx.repositories)
    return Strength(
        category="Impact",
        title="Community Recognition",
        description=(
            f"Your projects have earned {format_count(stars)} stars and "
            f"{format_count(forks)} forks, showing real-world value and adoption."
        ),
        icon="star",
    )


def _popular_repo_strength(ctx: RuleContext) -> Strength:
    # first repository with the most stars
    repo = max(_popular_repos(ctx), key=lambda r: r.stars)
    return Strength(
        category="Project",
        title="Notable Open Source Project",
        description=(
            f'"{repo.name}" has gained significant traction with '
            f"{format_count(repo.stars)} stars, demonstrating your ability to "
            "build useful tools."
        ),
        icon="trophy",
    )


def _has_popular_repo(ctx: RuleContext) -> bool:
    return bool(_popular_repos(ctx))


STRENGTH_RULES: tuple[Rule[Strength], ...] = (
    Rule(
        lambda ctx: ctx.scores.documentation >= 80,
        lambda ctx: Strength(
            category="Documentation",
            title="Excellent Documentation",
            description=(
                "Your repositories have comprehensive READMEs with clear "
                "instructions. Recruiters value developers who can communicate "
                "effectively."
            ),
            icon="document-text",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.structure >= 80,
        lambda ctx: Strength(
            category="Structure",
            title="Professional Code Organization",
            description=(
                "Your projects follow industry best practices with proper "
                "structure, configuration files, and CI/CD setup."
            ),
            icon="code-bracket",
        ),
    ),
    Rule(lambda ctx: ctx.scores.activity >= 80, _activity_strength),
    Rule(lambda ctx: ctx.scores.organization >= 80, _organization_strength),
    Rule(lambda ctx: ctx.scores.impact >= 70, _impact_strength),
    Rule(
        lambda ctx: ctx.scores.technical >= 80,
        lambda ctx: Strength(
            category="Technical",
            title="Diverse Technical Skills",
            description=(
                f"Proficiency in {len(ctx.data.languages)} programming languages "
                "shows adaptability and a broad technical foundation."
            ),
            icon="cpu-chip",
        ),
    ),
    Rule(
        lambda ctx: ctx.data.profile.has_profile_readme,
        lambda ctx: Strength(
            category="Profile",
            title="Professional GitHub Profile",
            description=(
                "Your profile README creates a strong first impression and "
                "showcases your personality and skills effectively."
            ),
            icon="user",
        ),
    ),
    Rule(_has_popular_repo, _popular_repo_strength),
)


def generate_strengths(
    scores: DimensionScores, data: UserData, now: datetime | None = None
) -> list[Strength]:
    """Return at most five strengths, in rule order."""
    return evaluate(STRENGTH_RULES, _context(scores, data, now))[:MAX_STRENGTHS]


# ── Red flags ───────────────────────────────────────────────────────────────


RED_FLAG_RULES: tuple[Rule[RedFlag], ...] = (
    Rule(
        lambda ctx: ctx.scores.documentation < 50 and _repos_without_readme(ctx) > 0,
        lambda ctx: RedFlag(
            category="Documentation",
            title="Missing README Files",
            description=(
                f"{_repos_without_readme(ctx)} of your repositories lack README "
                "files. This makes it difficult for recruiters to understand "
                "your projects."
            ),
            severity=Severity.HIGH,
            icon="exclamation-triangle",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.activity < 40 and _commits_last_6_months(ctx) == 0,
        lambda ctx: RedFlag(
            category="Activity",
            title="No Recent Activity",
            description=(
                "No commits in the last 6 months. Inactive profiles may signal a "
                "lack of current coding practice or interest."
            ),
            severity=Severity.HIGH,
            icon="pause-circle",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.activity < 40 and 0 < _commits_last_6_months(ctx) < 10,
        lambda ctx: RedFlag(
            category="Activity",
            title="Low Commit Activity",
            description=(
                "Sparse commit history suggests inconsistent development "
                "practices. Aim for regular, meaningful commits."
            ),
            severity=Severity.MEDIUM,
            icon="chart-bar",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.organization < 40
        and all(r.is_fork for r in ctx.repositories),
        lambda ctx: RedFlag(
            category="Originality",
            title="No Original Projects",
            description=(
                "All your repositories are forks. Recruiters want to see your "
                "original work and problem-solving abilities."
            ),
            severity=Severity.CRITICAL,
            icon="document-duplicate",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.organization < 40
        and _repos_missing_description(ctx) > len(ctx.repositories) * 0.5,
        lambda ctx: RedFlag(
            category="Organization",
            title="Missing Repository Descriptions",
            description=(
                f"{_repos_missing_description(ctx)} repositories lack descriptions. "
                "Clear descriptions help recruiters quickly understand your work."
            ),
            severity=Severity.MEDIUM,
            icon="annotation",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.impact < 30 and len(ctx.repositories) > 5,
        lambda ctx: RedFlag(
            category="Impact",
            title="Limited Community Engagement",
            description=(
                "Despite having multiple repositories, there's minimal community "
                "engagement. Consider promoting your projects or contributing to "
                "popular open-source projects."
            ),
            severity=Severity.LOW,
            icon="users",
        ),
    ),
    Rule(
        lambda ctx: not ctx.data.profile.has_profile_readme,
        lambda ctx: RedFlag(
            category="Profile",
            title="Missing Profile README",
            description=(
                "A profile README is your first impression. Without one, you're "
                "missing an opportunity to introduce yourself to recruiters."
            ),
            severity=Severity.MEDIUM,
            icon="identification",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.structure < 40,
        lambda ctx: RedFlag(
            category="Structure",
            title="Inconsistent Project Structure",
            description=(
                "Some projects lack standard configuration files like .gitignore "
                "or package.json. These are expected in professional projects."
            ),
            severity=Severity.MEDIUM,
            icon="wrench",
        ),
    ),
)


def generate_red_flags(
    scores: DimensionScores, data: UserData, now: datetime | None = None
) -> list[RedFlag]:
    """Return every triggered red flag, in rule order."""
    return evaluate(RED_FLAG_RULES, _context(scores, data, now))


# ── Recommendations ─────────────────────────────────────────────────────────


RECOMMENDATION_RULES: tuple[Rule[Recommendation], ...] = (
    Rule(
        lambda ctx: ctx.scores.documentation < 70 and _repos_without_readme(ctx) > 0,
        lambda ctx: Recommendation(
            priority=Priority.HIGH if ctx.scores.documentation < 40 else Priority.MEDIUM,
            category="Documentation",
            title="Add README Files",
            description=(
                f"Create README.md files for your top "
                f"{min(_repos_without_readme(ctx), 3)} repositories. Include: "
                "project description, installation steps, usage examples, and "
                "screenshots."
            ),
            impact="High",
            icon="document-add",
            action="Start with your most starred repository",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.documentation < 70,
        lambda ctx: Recommendation(
            priority=Priority.MEDIUM,
            category="Documentation",
            title="Improve Code Comments",
            description=(
                "Add inline comments to complex code sections and create "
                "documentation for public APIs. This shows you care about "
                "maintainability."
            ),
            impact="Medium",
            icon="chat-alt-2",
        ),
    ),
    Rule(
        lambda ctx: not ctx.data.profile.has_profile_readme,
        lambda ctx: Recommendation(
            priority=Priority.HIGH,
            category="Profile",
            title="Create a Profile README",
            description=(
                "Create a special repository named after your username and add a "
                "README.md. Introduce yourself, showcase your skills, and add "
                "contact information."
            ),
            impact="High",
            icon="user-add",
            action=f"Create repository: {ctx.data.profile.username}",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.activity < 60,
        lambda ctx: Recommendation(
            priority=Priority.HIGH,
            category="Activity",
            title="Establish Consistent Commit Habits",
            description=(
                "Aim for at least 3-5 commits per week across your projects. "
                "Regular activity signals reliability and ongoing skill "
                "development."
            ),
            impact="High",
            icon="calendar",
            action="Set a weekly coding schedule",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.organization < 60 and _repos_missing_description(ctx) > 0,
        lambda ctx: Recommendation(
            priority=Priority.MEDIUM,
            category="Organization",
            title="Add Repository Descriptions",
            description=(
                "Add clear, concise descriptions to all repositories. Include: "
                "what it does, technologies used, and current status."
            ),
            impact="Medium",
            icon="tag",
            action=f"Update {_repos_missing_description(ctx)} repositories",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.organization < 60 and _repos_missing_topics(ctx) > 0,
        lambda ctx: Recommendation(
            priority=Priority.LOW,
            category="Organization",
            title="Add Repository Topics",
            description=(
                "Tag your repositories with relevant topics (languages, "
                "frameworks, domains) to improve discoverability."
            ),
            impact="Low",
            icon="hashtag",
            action="Add 3-5 topics per repository",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.structure < 60,
        lambda ctx: Recommendation(
            priority=Priority.MEDIUM,
            category="Structure",
            title="Add .gitignore Files",
            description=(
                "Ensure all repositories have appropriate .gitignore files. This "
                "keeps repositories clean and professional."
            ),
            impact="Medium",
            icon="shield",
            action="Use gitignore.io for language-specific templates",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.structure < 60,
        lambda ctx: Recommendation(
            priority=Priority.LOW,
            category="Structure",
            title="Set Up CI/CD",
            description=(
                "Add GitHub Actions workflows for automated testing and "
                "deployment. This demonstrates DevOps awareness."
            ),
            impact="Medium",
            icon="play-circle",
            action="Start with a simple test workflow",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.impact < 50,
        lambda ctx: Recommendation(
            priority=Priority.MEDIUM,
            category="Impact",
            title="Share Your Projects",
            description=(
                "Share your best projects on social media, developer forums, or "
                "with your network. Create demo videos or write blog posts about "
                "them."
            ),
            impact="High",
            icon="share",
            action="Post on Twitter, LinkedIn, or Dev.to",
        ),
    ),
    Rule(
        lambda ctx: ctx.scores.technical < 60,
        lambda ctx: Recommendation(
            priority=Priority.LOW,
            category="Technical",
            title="Diversify Your Tech Stack",
            description=(
                "Experiment with new languages or frameworks. Contributing to "
                "projects in different tech stacks broadens your appeal."
            ),
            impact="Medium",
            icon="beaker",
            action="Try one new technology this month",
        ),
    ),
)


def sort_by_priority(items: Sequence[Recommendation]) -> list[Recommendation]:
    """Stable sort: critical, high, medium, low; ties keep their order."""
    return sorted(items, key=lambda rec: PRIORITY_RANK[rec.priority])


def generate_recommendations(
    scores: DimensionScores, data: UserData, now: datetime | None = None
) -> list[Recommendation]:
    """Return triggered recommendations ordered by priority."""
    return sort_by_priority(evaluate(RECOMMENDATION_RULES, _context(scores, data, now)))
