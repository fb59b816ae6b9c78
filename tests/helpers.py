"""Builders for domain snapshots used across the test-suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from profile_analyzer.domain.entities import (
    Commit,
    ContentEntry,
    Profile,
    ReadmeInfo,
    RepoDetail,
    Repository,
    UserData,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

WELL_KEPT_CONTENTS = (
    ContentEntry(".gitignore", "file"),
    ContentEntry("pyproject.toml", "file"),
    ContentEntry("src", "dir"),
    ContentEntry(".github", "dir"),
)


def make_repo(name: str = "repo", **overrides: object) -> Repository:
    fields: dict[str, object] = {"id": abs(hash(name)) % 10_000, "name": name}
    fields.update(overrides)
    return Repository(**fields)  # type: ignore[arg-type]


def make_detail(name: str = "repo", **overrides: object) -> RepoDetail:
    fields: dict[str, object] = {"id": abs(hash(name)) % 10_000, "name": name}
    fields.update(overrides)
    return RepoDetail(**fields)  # type: ignore[arg-type]


def readme_text(length: int, *sections: str) -> str:
    body = " ".join(sections)
    return body + "x" * max(0, length - len(body))


def make_commit(when: datetime, sha: str = "abc") -> Commit:
    return Commit(sha=sha, message="change", authored_at=when)


def commits_at(*days_ago: float, now: datetime = NOW) -> tuple[Commit, ...]:
    return tuple(
        make_commit(now - timedelta(days=d), sha=f"c{i}") for i, d in enumerate(days_ago)
    )


def make_user_data(**overrides: object) -> UserData:
    fields: dict[str, object] = {"profile": Profile(username="octocat")}
    fields.update(overrides)
    return UserData(**fields)  # type: ignore[arg-type]


def polished_detail(name: str) -> RepoDetail:
    """A repository that maxes out documentation and structure."""
    return make_detail(
        name,
        readme=ReadmeInfo.from_text(readme_text(2500, "install", "usage", "contributing")),
        contents=WELL_KEPT_CONTENTS,
    )
