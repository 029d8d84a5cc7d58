# tests/unit/test_schemas.py
"""Unit tests for the planning schemas."""

import pytest
from pydantic import ValidationError

from planforge.planning.schemas import (
    ADR,
    AgentDefinition,
    AgentTeam,
    Alternative,
    CostEstimate,
    CostItem,
    DependencyRisk,
    Feature,
    InputEnrichment,
    ProjectSummary,
)


class TestProjectSummary:
    def test_camel_and_snake_case(self):
        camel = ProjectSummary.model_validate({"projectName": "A", "teamSize": 3})
        snake = ProjectSummary(project_name="A", team_size="3")
        assert camel == snake

    def test_null_lists_become_empty(self):
        summary = ProjectSummary.model_validate({"projectName": "A", "features": None})
        assert summary.features == []

    def test_name_required(self):
        with pytest.raises(ValidationError):
            ProjectSummary(project_name="")

    def test_frozen(self):
        summary = ProjectSummary(project_name="A")
        with pytest.raises(ValidationError):
            summary.project_name = "B"

    def test_unknown_keys_ignored(self):
        assert ProjectSummary.model_validate({"projectName": "A", "mood": "happy"}).project_name == "A"


class TestInputEnrichment:
    def test_tier_and_budget_normalized(self):
        enrichment = InputEnrichment(scalability_tier=" Large ", budget_constraint="HIGH")
        assert enrichment.scalability_tier == "large"
        assert enrichment.budget_constraint == "high"

    def test_complexity_slider_bounds(self):
        with pytest.raises(ValidationError):
            InputEnrichment(complexity_slider=11)


class TestFeature:
    def test_priority_lowercased(self):
        assert Feature(name="A", priority="HIGH", complexity="Low", estimated_hours=1).priority == "high"

    def test_hours_positive(self):
        with pytest.raises(ValidationError):
            Feature(name="A", priority="high", complexity="low", estimated_hours=0)


class TestAdr:
    def _adr(self, **overrides):
        fields = dict(
            id=1,
            title="T",
            context="C",
            decision="D",
            consequences=["a", "b", "c"],
            alternatives=[Alternative(name="x"), Alternative(name="y")],
        )
        return ADR(**{**fields, **overrides})

    def test_defaults(self):
        adr = self._adr()
        assert adr.status == "accepted"
        assert adr.date_created is not None

    def test_consequence_bounds(self):
        with pytest.raises(ValidationError):
            self._adr(consequences=["a", "b"])
        with pytest.raises(ValidationError):
            self._adr(consequences=list("abcdef"))

    def test_alternative_bounds(self):
        with pytest.raises(ValidationError):
            self._adr(alternatives=[Alternative(name="x")])

    def test_id_range(self):
        with pytest.raises(ValidationError):
            self._adr(id=9)


class TestCost:
    def test_annual_defaults_to_twelve_months(self):
        item = CostItem(service="S", category="hosting", monthly_estimate=10)
        assert item.annual_estimate == 120

    def test_explicit_annual_kept(self):
        item = CostItem.model_validate(
            {"service": "S", "category": "hosting", "monthlyEstimate": 10, "annualEstimate": 100}
        )
        assert item.annual_estimate == 100

    def test_from_items(self):
        items = [
            CostItem(service="A", category="hosting", monthly_estimate=7),
            CostItem(service="B", category="database", monthly_estimate=25),
        ]
        estimate = CostEstimate.from_items(items, confidence="medium")
        assert estimate.total_monthly == 32
        assert estimate.total_annual == 384
        assert estimate.notes == []

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            CostItem(service="S", category="hosting", monthly_estimate=-1)


class TestTeamAndRisk:
    def test_team_totals(self):
        agents = [
            AgentDefinition(name="A", role="r", workload_percentage=50, priority="high", estimated_hours=10),
            AgentDefinition(name="B", role="r", workload_percentage=50, priority="low", estimated_hours=5),
        ]
        team = AgentTeam.from_agents(agents, ["A", "B"])
        assert team.total_agents == 2
        assert team.estimated_total_hours == 15
        assert team.get("B").estimated_hours == 5
        assert team.get("C") is None

    def test_risk_requires_factors(self):
        with pytest.raises(ValidationError):
            DependencyRisk(package_name="x", risk_level="low", risk_factors=[], mitigation="m")
