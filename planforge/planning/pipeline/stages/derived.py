# planforge/planning/pipeline/stages/derived.py
"""
Deterministic derivation stages.

Each one is a pure function of the request and earlier stage outputs, so
they never call the reasoning service.
"""

from typing import Any

from planforge.planning import cost, dependency_risk, team, tools
from planforge.planning.diagrams import generate_diagrams
from planforge.planning.schemas import (
    AgentTeam,
    CostEstimate,
    DependencyRisk,
    DiagramSet,
    ToolRecommendations,
)

from .base import PipelineStage, PlanRequest


class TeamStage(PipelineStage):
    requires = ("research",)

    @property
    def name(self) -> str:
        return "team"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.35, 0.42)

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> AgentTeam:
        return team.compose(request.summary, prior_outputs["research"])


class ToolsStage(PipelineStage):
    requires = ("research",)

    @property
    def name(self) -> str:
        return "tools"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.42, 0.5)

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> ToolRecommendations:
        return tools.recommend(request.summary, prior_outputs["research"])


class DiagramStage(PipelineStage):
    requires = ("research",)

    @property
    def name(self) -> str:
        return "diagrams"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.75, 0.82)

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> DiagramSet:
        return generate_diagrams(request.summary, prior_outputs["research"], request.enrichment)


class CostStage(PipelineStage):
    requires = ("research", "team")

    @property
    def name(self) -> str:
        return "cost"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.82, 0.9)

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> CostEstimate:
        return cost.estimate(
            request.summary,
            prior_outputs["research"],
            prior_outputs["team"],
            request.enrichment,
        )


class RiskStage(PipelineStage):
    requires = ("tools",)

    @property
    def name(self) -> str:
        return "risks"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.9, 1.0)

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> list[DependencyRisk]:
        return dependency_risk.analyze(prior_outputs["tools"])
