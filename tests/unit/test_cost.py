# tests/unit/test_cost.py
"""Unit tests for the cost estimate."""

import pytest

from planforge.planning import cost, team
from planforge.planning.schemas import (
    Feature,
    InputEnrichment,
    NfrScalability,
    Persona,
    ProjectSummary,
)


@pytest.fixture
def task_team(task_summary, task_research):
    return team.compose(task_summary, task_research)


class TestTotals:
    def test_totals_equal_sum_of_items(self, task_summary, task_research, task_team):
        result = cost.estimate(task_summary, task_research, task_team)
        assert result.total_monthly == sum(i.monthly_estimate for i in result.items)
        assert result.total_annual == result.total_monthly * 12

    def test_each_item_annualized(self, task_summary, task_research, task_team):
        result = cost.estimate(task_summary, task_research, task_team)
        for item in result.items:
            assert item.annual_estimate == item.monthly_estimate * 12

    def test_small_tier_taskapp(self, task_summary, task_research, task_team):
        result = cost.estimate(task_summary, task_research, task_team)
        services = [i.service for i in result.items]
        assert services == [
            "Vercel (Frontend)",
            "Render/Railway (Backend)",
            "Supabase/Neon (PostgreSQL)",
            "Vercel Analytics / Plausible",
            "Sentry (Error Tracking)",
        ]
        assert result.total_monthly == 7
        assert result.total_annual == 84
        assert result.notes == cost.ESTIMATE_NOTES

    def test_development_cost(self, task_summary, task_research, task_team):
        dev = cost.estimate(task_summary, task_research, task_team).development_cost
        assert dev.total_hours == task_team.estimated_total_hours
        assert dev.total_min == dev.total_hours * 50
        assert dev.total_max == dev.total_hours * 150


class TestTiers:
    def test_medium_tier_adds_cache_for_realtime(self, task_summary, task_research, task_team):
        enrichment = InputEnrichment(scalability_tier="medium")
        result = cost.estimate(task_summary, task_research, task_team, enrichment)
        assert "Upstash Redis (Cache)" in [i.service for i in result.items]
        assert result.items[0].monthly_estimate == 20

    def test_enterprise_tier_uses_large_prices_and_bandwidth(
        self, task_summary, task_research, task_team
    ):
        enrichment = InputEnrichment(scalability_tier="Enterprise")
        result = cost.estimate(task_summary, task_research, task_team, enrichment)
        services = [i.service for i in result.items]
        assert services[0] == "AWS CloudFront + S3 (Frontend)"
        assert "AWS RDS (PostgreSQL)" in services
        assert "Additional Bandwidth" in services
        assert next(i for i in result.items if i.category == "bandwidth").monthly_estimate == 30

    def test_unknown_tier_prices_as_large(self):
        assert cost.hosting_items("galactic")[1].service == "AWS ECS Fargate (Backend)"
        assert cost.bandwidth_items("galactic") == []

    def test_small_tier_never_caches(self, task_research):
        assert len(cost.database_items(task_research, "small")) == 1


class TestFeatureDrivenItems:
    def test_storage_email_and_payments(self, research_factory):
        summary = ProjectSummary(
            project_name="Shop",
            features=["Image upload", "Email notifications", "Stripe checkout"],
        )
        research = research_factory(
            [Feature(name="Image upload", priority="high", complexity="medium", estimated_hours=16)],
            complexity="low",
        )
        agents = team.compose(summary, research)
        result = cost.estimate(summary, research, agents)
        by_category = {}
        for item in result.items:
            by_category.setdefault(item.category, []).append(item.service)
        assert by_category["storage"] == ["Cloudinary (Image/Media)"]
        assert "SendGrid/Resend (Email)" in by_category["third-party"]
        assert "Stripe (Payments)" in by_category["third-party"]
        assert "Sentry (Error Tracking)" not in by_category["third-party"]
        assert result.total_monthly == 57


class TestConfidence:
    def test_low_without_enrichment(self):
        assert cost.estimate_confidence(None) == "low"

    def test_medium_with_partial_enrichment(self):
        enrichment = InputEnrichment(personas=[Persona(name="Admin")])
        assert cost.estimate_confidence(enrichment) == "medium"

    def test_high_with_scale_and_budget(self):
        assert cost.estimate_confidence(
            InputEnrichment(scalability_tier="small", budget_constraint="low")
        ) == "high"
        assert cost.estimate_confidence(
            InputEnrichment(nfr_scalability=NfrScalability(expected_users=500), budget_constraint="medium")
        ) == "high"

    def test_budget_alone_is_medium(self):
        assert cost.estimate_confidence(InputEnrichment(budget_constraint="high")) == "medium"
