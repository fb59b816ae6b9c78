import unittest
from datetime import timedelta

from profile_analyzer.domain.entities import (
    DimensionScores,
    Priority,
    Profile,
    ReadmeInfo,
    Recommendation,
    Severity,
)
from profile_analyzer.services.insights import (
    MAX_STRENGTHS,
    generate_recommendations,
    generate_red_flags,
    generate_strengths,
    sort_by_priority,
)

from helpers import NOW, commits_at, make_detail, make_repo, make_user_data

_ALL_HIGH = DimensionScores(
    documentation=100, structure=100, activity=100, organization=100, impact=100, technical=100
)


def _titles(items) -> list[str]:
    return [item.title for item in items]


class TestStrengths(unittest.TestCase):
    def test_truncated_to_five_in_rule_order(self) -> None:
        data = make_user_data(
            profile=Profile("octocat", has_profile_readme=True),
            repositories=(make_repo(stars=500),),
        )
        strengths = generate_strengths(_ALL_HIGH, data, now=NOW)
        self.assertEqual(len(strengths), MAX_STRENGTHS)
        self.assertEqual(
            [s.category for s in strengths],
            ["Documentation", "Structure", "Activity", "Organization", "Impact"],
        )

    def test_nothing_earned_for_zero_scores(self) -> None:
        self.assertEqual(generate_strengths(DimensionScores(), make_user_data(), now=NOW), [])

    def test_popular_repo_strength_names_the_top_repository(self) -> None:
        data = make_user_data(
            repositories=(make_repo("small", stars=3), make_repo("hit", stars=1234)),
        )
        strengths = generate_strengths(DimensionScores(), data, now=NOW)
        self.assertEqual(_titles(strengths), ["Notable Open Source Project"])
        self.assertIn('"hit"', strengths[0].description)
        self.assertIn("1.2K stars", strengths[0].description)

    def test_popular_repo_ties_go_to_the_first_listed(self) -> None:
        data = make_user_data(
            repositories=(
                make_repo("first", stars=300),
                make_repo("second", stars=300),
                make_repo("third", stars=60),
            ),
        )
        strengths = generate_strengths(DimensionScores(), data, now=NOW)
        self.assertIn('"first"', strengths[0].description)

    def test_stars_below_fifty_earn_no_project_strength(self) -> None:
        data = make_user_data(repositories=(make_repo(stars=49),))
        self.assertEqual(generate_strengths(DimensionScores(), data, now=NOW), [])

    def test_activity_strength_counts_last_thirty_days(self) -> None:
        data = make_user_data(commits=commits_at(1, 5, 29, 31, 90))
        strengths = generate_strengths(DimensionScores(activity=85), data, now=NOW)
        self.assertIn("3 commits in the last 30 days", strengths[0].description)

    def test_impact_threshold_is_seventy(self) -> None:
        data = make_user_data()
        self.assertEqual(generate_strengths(DimensionScores(impact=69), data, now=NOW), [])
        self.assertEqual(
            _titles(generate_strengths(DimensionScores(impact=70), data, now=NOW)),
            ["Community Recognition"],
        )


class TestRedFlags(unittest.TestCase):
    def test_forks_only_profile_in_rule_order(self) -> None:
        data = make_user_data(
            repositories=tuple(make_repo(f"f{i}", is_fork=True) for i in range(6)),
            repo_details=(make_detail("f0", is_fork=True),),
        )
        flags = generate_red_flags(DimensionScores(), data, now=NOW)
        self.assertEqual(
            _titles(flags),
            [
                "Missing README Files",
                "No Recent Activity",
                "No Original Projects",
                "Missing Repository Descriptions",
                "Limited Community Engagement",
                "Missing Profile README",
                "Inconsistent Project Structure",
            ],
        )
        self.assertEqual(flags[2].severity, Severity.CRITICAL)

    def test_low_activity_replaces_no_activity(self) -> None:
        data = make_user_data(commits=commits_at(10, 20, 40))
        titles = _titles(generate_red_flags(DimensionScores(activity=20), data, now=NOW))
        self.assertIn("Low Commit Activity", titles)
        self.assertNotIn("No Recent Activity", titles)

    def test_commit_exactly_six_months_old_counts_as_recent(self) -> None:
        data = make_user_data(commits=commits_at(0, now=NOW.replace(month=4)))
        titles = _titles(generate_red_flags(DimensionScores(), data, now=NOW))
        self.assertIn("Low Commit Activity", titles)

    def test_older_commits_are_not_recent(self) -> None:
        old = NOW.replace(month=4) - timedelta(seconds=1)
        data = make_user_data(commits=commits_at(0, now=old))
        titles = _titles(generate_red_flags(DimensionScores(), data, now=NOW))
        self.assertIn("No Recent Activity", titles)

    def test_empty_account_has_no_original_projects(self) -> None:
        flags = generate_red_flags(DimensionScores(), make_user_data(), now=NOW)
        self.assertEqual(
            _titles(flags),
            [
                "No Recent Activity",
                "No Original Projects",
                "Missing Profile README",
                "Inconsistent Project Structure",
            ],
        )
        self.assertEqual(flags[1].severity, Severity.CRITICAL)

    def test_one_original_repository_clears_originality_flag(self) -> None:
        data = make_user_data(repositories=(make_repo("fork", is_fork=True), make_repo("own")))
        titles = _titles(generate_red_flags(DimensionScores(), data, now=NOW))
        self.assertNotIn("No Original Projects", titles)

    def test_clean_profile_raises_nothing(self) -> None:
        data = make_user_data(
            profile=Profile("octocat", has_profile_readme=True),
            repositories=(make_repo(description="Something useful"),),
            repo_details=(make_detail(readme=ReadmeInfo(exists=True, length=900)),),
            commits=commits_at(1, 2, 3),
        )
        self.assertEqual(generate_red_flags(_ALL_HIGH, data, now=NOW), [])


class TestRecommendations(unittest.TestCase):
    def test_zero_scores_sorted_stably_by_priority(self) -> None:
        data = make_user_data(
            repositories=(make_repo("a"), make_repo("b")),
            repo_details=(make_detail("a"),),
        )
        recs = generate_recommendations(DimensionScores(), data, now=NOW)
        self.assertEqual(
            _titles(recs),
            [
                "Add README Files",
                "Create a Profile README",
                "Establish Consistent Commit Habits",
                "Improve Code Comments",
                "Add Repository Descriptions",
                "Add .gitignore Files",
                "Share Your Projects",
                "Add Repository Topics",
                "Set Up CI/CD",
                "Diversify Your Tech Stack",
            ],
        )
        self.assertEqual(recs[1].action, "Create repository: octocat")
        self.assertEqual(recs[4].action, "Update 2 repositories")

    def test_readme_priority_drops_to_medium_above_forty(self) -> None:
        data = make_user_data(
            profile=Profile("octocat", has_profile_readme=True),
            repo_details=(make_detail(),),
        )
        scores = DimensionScores(
            documentation=55, structure=90, activity=90, organization=90, impact=90, technical=90
        )
        recs = generate_recommendations(scores, data, now=NOW)
        self.assertEqual(_titles(recs), ["Add README Files", "Improve Code Comments"])
        self.assertEqual(recs[0].priority, Priority.MEDIUM)

    def test_strong_profile_needs_nothing(self) -> None:
        data = make_user_data(profile=Profile("octocat", has_profile_readme=True))
        self.assertEqual(generate_recommendations(_ALL_HIGH, data, now=NOW), [])

    def test_sort_keeps_declaration_order_within_priority(self) -> None:
        def rec(title: str, priority: Priority) -> Recommendation:
            return Recommendation(priority, "c", title, "d", "i", "x")

        items = [
            rec("a", Priority.LOW),
            rec("b", Priority.CRITICAL),
            rec("c", Priority.LOW),
            rec("d", Priority.HIGH),
            rec("e", Priority.CRITICAL),
        ]
        self.assertEqual(_titles(sort_by_priority(items)), ["b", "e", "d", "a", "c"])


if __name__ == "__main__":
    unittest.main()
