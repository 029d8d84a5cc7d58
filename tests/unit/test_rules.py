# tests/unit/test_rules.py
"""Unit tests for the keyword rule tables."""

import pytest

from planforge.planning import rules


class TestKeywordMatching:
    def test_short_keyword_must_start_a_word(self):
        assert rules.has_keyword("AI assistant", "ai")
        assert not rules.has_keyword("Email notifications", "ai")

    def test_long_keyword_matches_substring(self):
        assert rules.has_keyword("User authentication", "auth")
        assert rules.has_keyword("OAuth login", "auth")

    def test_case_insensitive(self):
        assert rules.has_keyword("REST API", "api")
        assert rules.has_any("Realtime Feed", ("websocket", "realtime"))


class TestPriorityRules:
    @pytest.mark.parametrize(
        "name,position,expected",
        [
            ("Login page", 5, "critical"),
            ("Core scheduling", 4, "critical"),
            ("Dashboard", 0, "high"),
            ("Dashboard", 3, "medium"),
            ("REST API", 4, "high"),
            ("Settings interface", 4, "medium"),
            ("Analytics export", 5, "low"),
        ],
    )
    def test_first_match_wins(self, name, position, expected):
        assert rules.PRIORITY_RULES.evaluate(name, position) == expected

    def test_security_beats_position(self):
        rule = rules.PRIORITY_RULES.first_match("Auth flow", 0)
        assert rule.label == "security-sensitive"


class TestComplexityAndHours:
    def test_feature_complexity(self):
        assert rules.FEATURE_COMPLEXITY_RULES.evaluate("Live streaming") == "high"
        assert rules.FEATURE_COMPLEXITY_RULES.evaluate("Show profile") == "low"
        assert rules.FEATURE_COMPLEXITY_RULES.evaluate("Task sharing") == "medium"

    def test_auth_flat_rate(self):
        assert rules.estimate_feature_hours("User auth", "high") == 16

    def test_adjustments_apply_in_order(self):
        # crud resets to 12, then ui adds 8
        assert rules.estimate_feature_hours("CRUD UI", "medium") == 20
        assert rules.estimate_feature_hours("Admin interface tests", "low") == 20


class TestProjectComplexity:
    def test_description_only_signals(self):
        score = rules.complexity_score("real-time AI chat with payment", [])
        assert score == 5
        assert rules.complexity_bucket(score) == "high"

    def test_feature_count_points(self):
        assert rules.feature_count_points(5) == 0
        assert rules.feature_count_points(6) == 1
        assert rules.feature_count_points(11) == 2

    @pytest.mark.parametrize(
        "timeline,expected",
        [("16 weeks", 1), ("12 weeks", 0), ("3 months", 0), ("6 months", 1), (None, 0), ("ASAP", 0)],
    )
    def test_timeline_points(self, timeline, expected):
        assert rules.timeline_points(timeline) == expected

    def test_buckets(self):
        assert rules.complexity_bucket(0) == "low"
        assert rules.complexity_bucket(2) == "medium"
        assert rules.complexity_bucket(4) == "high"


class TestTeamSize:
    def test_team_size_number(self):
        assert rules.team_size_number("3 devs") == 3
        assert rules.team_size_number("solo") == 1
        assert rules.team_size_number(None) == 1
        assert rules.team_size_number("0") == 1

    def test_is_solo_team(self):
        assert rules.is_solo_team("1")
        assert rules.is_solo_team("Solo founder")
        assert not rules.is_solo_team("2")
        assert not rules.is_solo_team(None)


class TestImpliedFeatures:
    def test_auth_covered_by_existing_feature(self):
        implied = rules.IMPLIED_FEATURES[0]
        assert implied.triggered_by("users sign in")
        assert implied.covered(["User auth"])
        assert not implied.covered(["Task sharing"])
