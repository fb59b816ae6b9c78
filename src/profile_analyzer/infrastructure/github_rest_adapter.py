"""GitHub REST API adapter — implements the ProfileFetcher port."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any

import httpx

from profile_analyzer.domain.entities import (
    Commit,
    ContentEntry,
    Profile,
    ReadmeInfo,
    RepoDetail,
    Repository,
    UserData,
)
from profile_analyzer.domain.exceptions import (
    GitHubAccessDeniedError,
    GitHubApiError,
    GitHubRateLimitError,
    UpstreamTransientError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"
_PAGE_SIZE = 30


class GitHubRestAdapter:
    """Concrete ProfileFetcher backed by the GitHub v3 REST API.

    Network failures and 5xx answers are retried with exponential backoff
    (``retry_base_delay * 2**attempt``) up to ``max_retries`` attempts.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        max_repos: int = 30,
        detail_repos: int = 10,
        commit_repos: int = 5,
        commits_per_repo: int = 50,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._max_repos = max_repos
        self._detail_repos = detail_repos
        self._commit_repos = commit_repos
        self._commits_per_repo = commits_per_repo
        self._max_retries = max(1, max_retries)
        self._retry_base_delay = retry_base_delay
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "profile-analyzer/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    # ── Aggregate ───────────────────────────────────────────────────────

    async def fetch_user_data(self, username: str) -> UserData:
        """Fetch profile, repositories, top-repo details and a commit sample."""
        profile, repos = await asyncio.gather(
            self.fetch_profile(username),
            self.fetch_repositories(username),
        )

        top_repos = sorted(repos, key=lambda r: r.stars, reverse=True)[: self._detail_repos]
        details = await asyncio.gather(
            *(self._fetch_detail(username, repo) for repo in top_repos)
        )

        commit_batches = await asyncio.gather(
            *(
                self.fetch_commits(username, repo.name)
                for repo in top_repos[: self._commit_repos]
            )
        )
        commits = [c for batch in commit_batches for c in batch]

        has_readme = await self.has_profile_readme(username)
        languages = Counter(r.language for r in repos if r.language)

        logger.info(
            "Fetched %s: %d repos, %d detailed, %d commits",
            username,
            len(repos),
            len(details),
            len(commits),
        )
        return UserData(
            profile=replace(profile, has_profile_readme=has_readme),
            repositories=tuple(repos),
            repo_details=tuple(details),
            commits=tuple(commits),
            languages=dict(languages),
            fetched_at=datetime.now(timezone.utc),
        )

    # ── Individual resources ────────────────────────────────────────────

    async def fetch_profile(self, username: str) -> Profile:
        """GET /users/{user} → Profile."""
        resp = await self._api_get(f"/users/{username}")
        data = resp.json()
        return Profile(
            username=data.get("login", username),
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            company=data.get("company"),
            location=data.get("location"),
            blog=data.get("blog"),
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            public_repos=data.get("public_repos") or 0,
            profile_url=data.get("html_url"),
            created_at=_parse_timestamp(data.get("created_at")),
        )

    async def fetch_repositories(self, username: str) -> list[Repository]:
        """GET /users/{user}/repos, most recently updated first, up to the cap."""
        repos: list[Repository] = []
        page = 1
        while len(repos) < self._max_repos:
            resp = await self._api_get(
                f"/users/{username}/repos",
                params={
                    "sort": "updated",
                    "direction": "desc",
                    "per_page": str(_PAGE_SIZE),
                    "page": str(page),
                },
            )
            batch = resp.json()
            if not batch:
                break
            repos.extend(_to_repository(item) for item in batch)
            if len(batch) < _PAGE_SIZE:
                break
            page += 1
        return repos[: self._max_repos]

    async def fetch_readme(self, username: str, repo: str) -> ReadmeInfo:
        """Raw README text reduced to :class:`ReadmeInfo`; 404 → missing."""
        try:
            resp = await self._api_get(
                f"/repos/{username}/{repo}/readme", accept=_RAW_MEDIA_TYPE
            )
        except UserNotFoundError:
            return ReadmeInfo()
        return ReadmeInfo.from_text(resp.text)

    async def fetch_languages(self, username: str, repo: str) -> dict[str, int]:
        """GET /repos/{user}/{repo}/languages → {lang: bytes}."""
        try:
            resp = await self._api_get(f"/repos/{username}/{repo}/languages")
        except GitHubRateLimitError:
            raise
        except GitHubApiError:
            logger.debug("Failed to fetch languages for %s/%s, returning empty", username, repo)
            return {}
        data: dict[str, int] = resp.json()
        return data

    async def fetch_contents(self, username: str, repo: str) -> tuple[ContentEntry, ...]:
        """GET /repos/{user}/{repo}/contents → root directory listing."""
        try:
            resp = await self._api_get(f"/repos/{username}/{repo}/contents")
        except GitHubRateLimitError:
            raise
        except GitHubApiError:
            logger.debug("Failed to fetch contents for %s/%s, returning empty", username, repo)
            return ()
        data = resp.json()
        if not isinstance(data, list):
            return ()
        return tuple(
            ContentEntry(
                name=item.get("name", ""),
                type=item.get("type", "file"),
                size=item.get("size") or 0,
            )
            for item in data
        )

    async def fetch_commits(self, username: str, repo: str) -> list[Commit]:
        """GET /repos/{user}/{repo}/commits → most recent commits."""
        try:
            resp = await self._api_get(
                f"/repos/{username}/{repo}/commits",
                params={"per_page": str(min(self._commits_per_repo, 100))},
            )
        except GitHubRateLimitError:
            raise
        except GitHubApiError:
            logger.debug("Failed to fetch commits for %s/%s, returning empty", username, repo)
            return []
        return [_to_commit(item) for item in resp.json()]

    async def has_profile_readme(self, username: str) -> bool:
        """A profile README lives in the ``{user}/{user}`` repository."""
        try:
            await self._api_get(f"/repos/{username}/{username}/readme")
        except GitHubRateLimitError:
            raise
        except GitHubApiError:
            return False
        return True

    async def _fetch_detail(self, username: str, repo: Repository) -> RepoDetail:
        readme, languages, contents = await asyncio.gather(
            self.fetch_readme(username, repo.name),
            self.fetch_languages(username, repo.name),
            self.fetch_contents(username, repo.name),
        )
        return RepoDetail(
            **{f.name: getattr(repo, f.name) for f in fields(Repository)},
            readme=readme,
            languages=languages,
            contents=contents,
        )

    # ── Transport ───────────────────────────────────────────────────────

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        *,
        accept: str | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with retries and error translation."""
        url = f"{self._api_url}{endpoint}"
        headers = dict(self._api_headers)
        if accept:
            headers["Accept"] = accept

        last_error: UpstreamTransientError | None = None
        for attempt in range(self._max_retries):
            try:
                resp = await self._client.get(url, headers=headers, params=params)
            except httpx.HTTPError as exc:
                last_error = UpstreamTransientError(f"Network error fetching {url}: {exc}")
            else:
                if resp.status_code < 500:
                    return _check_response(resp, url)
                last_error = UpstreamTransientError(
                    f"GitHub API returned HTTP {resp.status_code} for {url}",
                    status_code=resp.status_code,
                )

            if attempt + 1 < self._max_retries:
                delay = self._retry_base_delay * (2**attempt)
                logger.warning(
                    "%s (attempt %d/%d), retrying in %.1fs",
                    last_error,
                    attempt + 1,
                    self._max_retries,
                    delay,
                )
                await asyncio.sleep(delay)

        assert last_error is not None
        raise last_error


# ── Helpers ─────────────────────────────────────────────────────────────────


def _check_response(resp: httpx.Response, url: str) -> httpx.Response:
    if resp.status_code == 200:
        return resp

    if resp.status_code == 404:
        raise UserNotFoundError(
            "GitHub profile not found. Please check the username.", status_code=404
        )

    if resp.status_code == 403:
        if resp.headers.get("x-ratelimit-remaining", "") == "0":
            raise _rate_limit_error(resp)
        raise GitHubAccessDeniedError(
            "Access forbidden. The profile may be private.", status_code=403
        )

    if resp.status_code == 429:
        raise _rate_limit_error(resp)

    raise GitHubApiError(
        f"GitHub API returned HTTP {resp.status_code} for {url}",
        status_code=resp.status_code,
    )


def _rate_limit_error(resp: httpx.Response) -> GitHubRateLimitError:
    reset_at: datetime | None = None
    reset_raw = resp.headers.get("x-ratelimit-reset", "")
    try:
        reset_at = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc)
    except (ValueError, OSError):
        reset_at = None

    limit_raw = resp.headers.get("x-ratelimit-limit")
    limit = int(limit_raw) if limit_raw and limit_raw.isdigit() else None

    reset_str = reset_at.strftime("%Y-%m-%d %H:%M:%S UTC") if reset_at else "unknown"
    return GitHubRateLimitError(
        f"GitHub API rate limit exceeded. Resets at {reset_str}. "
        "Set the GITHUB_TOKEN environment variable to increase the limit.",
        reset_at=reset_at,
        limit=limit,
        remaining=0,
        status_code=resp.status_code,
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    """GitHub timestamps look like ``2024-01-01T12:34:56Z``."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_repository(item: dict[str, Any]) -> Repository:
    license_info = item.get("license") or {}
    return Repository(
        id=item["id"],
        name=item["name"],
        full_name=item.get("full_name", ""),
        description=item.get("description"),
        url=item.get("html_url"),
        homepage=item.get("homepage"),
        is_fork=bool(item.get("fork")),
        stars=item.get("stargazers_count") or 0,
        forks=item.get("forks_count") or 0,
        watchers=item.get("watchers_count") or 0,
        open_issues=item.get("open_issues_count") or 0,
        language=item.get("language"),
        topics=tuple(item.get("topics") or ()),
        license=license_info.get("name"),
        size=item.get("size") or 0,
        created_at=_parse_timestamp(item.get("created_at")),
        updated_at=_parse_timestamp(item.get("updated_at")),
        pushed_at=_parse_timestamp(item.get("pushed_at")),
    )


def _to_commit(item: dict[str, Any]) -> Commit:
    author = (item.get("commit") or {}).get("author") or {}
    return Commit(
        sha=item.get("sha", ""),
        message=(item.get("commit") or {}).get("message", ""),
        author=author.get("name"),
        email=author.get("email"),
        authored_at=_parse_timestamp(author.get("date")),
        url=item.get("html_url"),
    )
