import unittest
from dataclasses import replace
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from profile_analyzer.domain.entities import Profile, UserData
from profile_analyzer.domain.exceptions import (
    GitHubRateLimitError,
    UpstreamTransientError,
    UserNotFoundError,
)
from profile_analyzer.infrastructure.config import Settings, get_settings
from profile_analyzer.infrastructure.memory_cache import InMemoryTTLCache
from profile_analyzer.interface.app import create_app
from profile_analyzer.interface.dependencies import get_use_case
from profile_analyzer.services.analyze_profile import AnalyzeProfileUseCase

from helpers import commits_at, make_repo, make_user_data, polished_detail


class StubFetcher:
    def __init__(self) -> None:
        self.error: Exception | None = None

    async def fetch_user_data(self, username: str) -> UserData:
        if self.error is not None:
            raise self.error
        return make_user_data(
            profile=Profile(username, has_profile_readme=True),
            repositories=(make_repo("tool", stars=80, language="Python"),),
            repo_details=(replace(polished_detail("tool"), stars=80),),
            commits=commits_at(1, 2, 9),
            languages={"Python": 1},
        )


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.fetcher = StubFetcher()
        use_case = AnalyzeProfileUseCase(self.fetcher, InMemoryTTLCache())
        self.app = create_app()
        self.app.dependency_overrides[get_use_case] = lambda: use_case
        # No ``with`` block: lifespan (and real GitHub wiring) never runs.
        self.client = TestClient(self.app, raise_server_exceptions=False)


class TestAnalyzeEndpoint(ApiTestCase):
    def test_success_payload(self) -> None:
        resp = self.client.post("/api/analyze", json={"github_url": "https://github.com/octocat"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["profile"]["username"], "octocat")
        self.assertFalse(body["cached"])
        self.assertIn(body["scores"]["rating"]["label"], {"Excellent", "Strong", "Average", "Weak", "Critical"})
        self.assertEqual(set(body["scores"]["dimensions"]), {
            "documentation", "structure", "activity", "organization", "impact", "technical",
        })
        self.assertEqual(len(body["analysis"]["commit_patterns"]["weekly_data"]), 12)
        self.assertEqual(body["analysis"]["repository_insights"][0]["name"], "tool")
        for rec in body["analysis"]["recommendations"]:
            self.assertIn(rec["priority"], {"critical", "high", "medium", "low"})

    def test_repeat_request_is_cached(self) -> None:
        self.client.post("/api/analyze", json={"github_url": "octocat"})
        resp = self.client.post("/api/analyze", json={"github_url": "octocat"})
        self.assertTrue(resp.json()["cached"])

    def test_invalid_username_is_400(self) -> None:
        resp = self.client.post("/api/analyze", json={"github_url": "https://gitlab.com/x"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["status"], "error")
        self.assertIn("Invalid GitHub URL format", resp.json()["message"])

    def test_blank_body_is_422(self) -> None:
        resp = self.client.post("/api/analyze", json={"github_url": "   "})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["status"], "error")

    def test_unknown_user_is_404(self) -> None:
        self.fetcher.error = UserNotFoundError("GitHub profile not found. Please check the username.")
        resp = self.client.post("/api/analyze", json={"github_url": "ghost"})
        self.assertEqual(resp.status_code, 404)
        self.assertIn("not found", resp.json()["message"])

    def test_rate_limit_is_429_with_details(self) -> None:
        reset = datetime(2026, 10, 19, 13, 0, tzinfo=timezone.utc)
        self.fetcher.error = GitHubRateLimitError("limited", reset_at=reset, limit=60)
        resp = self.client.post("/api/analyze", json={"github_url": "octocat"})
        self.assertEqual(resp.status_code, 429)
        details = resp.json()["details"]
        self.assertEqual(details["limit"], 60)
        self.assertEqual(details["remaining"], 0)
        self.assertEqual(details["reset_at"], reset.isoformat())

    def test_transient_upstream_failure_is_503(self) -> None:
        self.fetcher.error = UpstreamTransientError("GitHub API returned HTTP 502")
        resp = self.client.post("/api/analyze", json={"github_url": "octocat"})
        self.assertEqual(resp.status_code, 503)

    def test_unexpected_error_is_500(self) -> None:
        self.fetcher.error = RuntimeError("kaboom")
        resp = self.client.post("/api/analyze", json={"github_url": "octocat"})
        self.assertEqual(resp.status_code, 500)
        self.assertNotIn("kaboom", resp.json()["message"])


class TestAnalysisLookup(ApiTestCase):
    def test_missing_analysis_is_404(self) -> None:
        resp = self.client.get("/api/analysis/octocat")
        self.assertEqual(resp.status_code, 404)

    def test_returns_cached_analysis(self) -> None:
        self.client.post("/api/analyze", json={"github_url": "octocat"})
        resp = self.client.get("/api/analysis/OctoCat")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["cached"])


class TestMetadataEndpoints(ApiTestCase):
    def test_health(self) -> None:
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["version"], "1.0.0")
        self.assertIn("timestamp", body)

    def test_cors_allows_configured_frontend(self) -> None:
        client = TestClient(create_app(Settings(frontend_url="https://app.example.com")))
        resp = client.options(
            "/api/analyze",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.headers["access-control-allow-origin"], "https://app.example.com"
        )

    def test_examples(self) -> None:
        resp = self.client.get("/api/examples")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([e["username"] for e in resp.json()][0], "torvalds")

    def test_status_reports_anonymous_limit(self) -> None:
        self.app.dependency_overrides[get_settings] = lambda: Settings(github_token=None)
        body = self.client.get("/api/status").json()
        self.assertEqual(body["status"], "operational")
        self.assertEqual(body["github_api"], {"authenticated": False, "requests_per_hour": 60})

    def test_status_reports_authenticated_limit(self) -> None:
        self.app.dependency_overrides[get_settings] = lambda: Settings(github_token="t")
        body = self.client.get("/api/status").json()
        self.assertEqual(body["github_api"]["requests_per_hour"], 5000)


if __name__ == "__main__":
    unittest.main()
