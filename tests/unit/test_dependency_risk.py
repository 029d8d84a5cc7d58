# tests/unit/test_dependency_risk.py
"""Unit tests for dependency risk analysis."""

import pytest

from planforge.planning import dependency_risk
from planforge.planning.schemas import ToolRecommendation, ToolRecommendations


def _recommendations(*packages_and_scopes):
    npm = [
        ToolRecommendation(
            name=f"Bundle {i}",
            category="npm-package",
            purpose="Test bundle",
            installation="npm install",
            priority="required",
            reason="Test",
            packages=list(packages),
            scope=scope,
        )
        for i, (packages, scope) in enumerate(packages_and_scopes)
    ]
    return ToolRecommendations.build([], npm, [], [])


class TestAnalyzePackage:
    def test_security_critical(self):
        risk = dependency_risk.analyze_package("bcrypt", "backend")
        assert risk.risk_level == "medium"
        assert risk.category == "security"
        assert risk.alternatives == ["bcryptjs (pure JS)", "argon2"]
        assert "Dependabot" in risk.mitigation

    def test_unlisted_package_has_no_finding(self):
        assert dependency_risk.analyze_package("zod", "backend") is None

    def test_large_bundle_only_in_frontend(self):
        risk = dependency_risk.analyze_package("moment", "frontend")
        assert risk.risk_level == "low"
        assert risk.category == "performance"
        assert risk.risk_factors == ["Large bundle size impacts page load performance"]
        assert risk.alternatives == ["date-fns", "dayjs", "luxon"]
        assert dependency_risk.analyze_package("moment", "backend") is None

    def test_known_problematic_is_high(self):
        risk = dependency_risk.analyze_package("node-sass")
        assert risk.risk_level == "high"
        assert risk.category == "maintenance"

    def test_substring_match_accumulates_factors(self):
        # matches security-critical (crypto) and database-driver (pg)
        risk = dependency_risk.analyze_package("pg-crypto")
        assert len(risk.risk_factors) == 4
        assert risk.risk_level == "medium"
        assert risk.category == "compatibility"

    def test_highest_level_wins(self):
        risk = dependency_risk.analyze_package("node-sass-cors")
        assert risk.risk_level == "high"
        assert risk.category == "maintenance"

    @pytest.mark.parametrize("package", ["jsonwebtoken", "next-auth", "@prisma/client", "redis"])
    def test_listed_packages_are_medium(self, package):
        assert dependency_risk.analyze_package(package).risk_level == "medium"


class TestAnalyze:
    def test_taskapp_findings(self, task_summary, task_research):
        from planforge.planning import tools

        risks = dependency_risk.analyze(tools.recommend(task_summary, task_research))
        names = [r.package_name for r in risks]
        assert names[:2] == ["cors", "express-validator"]
        assert "jsonwebtoken" in names
        assert "bcrypt" in names
        assert "@prisma/client" in names
        assert "zod" not in names

    def test_no_low_risk_without_factors(self, task_summary, task_research):
        from planforge.planning import tools

        for risk in dependency_risk.analyze(tools.recommend(task_summary, task_research)):
            assert risk.risk_factors
            assert risk.mitigation

    def test_idempotent(self):
        recommendations = _recommendations((["helmet", "moment"], "frontend"), (["pg"], "backend"))
        assert dependency_risk.analyze(recommendations) == dependency_risk.analyze(recommendations)

    def test_first_scope_wins_for_duplicates(self):
        recommendations = _recommendations((["lodash"], "backend"), (["lodash"], "frontend"))
        assert dependency_risk.analyze(recommendations) == []

    def test_empty(self):
        assert dependency_risk.analyze(ToolRecommendations()) == []
