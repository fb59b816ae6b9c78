import unittest
from datetime import datetime, timezone

from profile_analyzer.domain.entities import (
    AnalysisResult,
    DimensionScores,
    Profile,
    ProfileReport,
    ProfileStats,
)
from profile_analyzer.infrastructure.memory_cache import InMemoryTTLCache
from profile_analyzer.services.analytics import NO_COMMIT_DATA, NO_LANGUAGE_DATA
from profile_analyzer.services.score_aggregator import build_score_result

_WHEN = datetime(2026, 10, 19, tzinfo=timezone.utc)


def _report(login: str = "octocat") -> ProfileReport:
    return ProfileReport(
        profile=Profile(login),
        scores=build_score_result(DimensionScores()),
        analysis=AnalysisResult(
            strengths=(),
            red_flags=(),
            recommendations=(),
            commit_patterns=NO_COMMIT_DATA,
            language_analysis=NO_LANGUAGE_DATA,
            repository_insights=(),
            generated_at=_WHEN,
        ),
        stats=ProfileStats(0, 0, 0, 0, 0),
        analyzed_at=_WHEN,
        analysis_duration_ms=5,
    )


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryTTLCache(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.cache = InMemoryTTLCache(default_ttl=60, clock=self.clock)

    def test_get_returns_stored_value(self) -> None:
        report = _report()
        self.cache.set("analysis:octocat", report)
        self.assertIs(self.cache.get("analysis:octocat"), report)
        self.assertTrue(self.cache.has("analysis:octocat"))

    def test_missing_key(self) -> None:
        self.assertIsNone(self.cache.get("analysis:nobody"))
        self.assertFalse(self.cache.has("analysis:nobody"))

    def test_entry_expires_at_default_ttl(self) -> None:
        self.cache.set("k", _report())
        self.clock.now += 59
        self.assertIsNotNone(self.cache.get("k"))
        self.clock.now += 1
        self.assertIsNone(self.cache.get("k"))

    def test_explicit_ttl_overrides_default(self) -> None:
        self.cache.set("k", _report(), ttl=5)
        self.clock.now += 6
        self.assertFalse(self.cache.has("k"))

    def test_delete_reports_count(self) -> None:
        self.cache.set("k", _report())
        self.assertEqual(self.cache.delete("k"), 1)
        self.assertEqual(self.cache.delete("k"), 0)

    def test_stats_track_hits_misses_and_live_keys(self) -> None:
        self.cache.set("a", _report("a"))
        self.cache.set("b", _report("b"), ttl=1)
        self.cache.get("a")
        self.cache.get("zzz")
        self.clock.now += 2
        self.assertEqual(self.cache.stats(), {"keys": 1, "hits": 1, "misses": 1})

    def test_clear(self) -> None:
        self.cache.set("a", _report())
        self.cache.clear()
        self.assertEqual(self.cache.stats()["keys"], 0)


if __name__ == "__main__":
    unittest.main()
