# planforge/planning/schemas/plan_output.py
"""Aggregate of every stage output for one planning run."""

from datetime import datetime, timezone

from pydantic import Field

from .adr import ADR
from .base import PlannerModel
from .cost import CostEstimate
from .diagrams import DiagramSet
from .project import ClarificationQA, InputEnrichment, ProjectSummary
from .research import ResearchResult
from .risk import DependencyRisk
from .team import AgentTeam
from .tools import ToolRecommendations


class PlanOutput(PlannerModel):
    """Everything the build spec assembler needs, in one immutable value."""

    summary: ProjectSummary
    research: ResearchResult
    team: AgentTeam
    tools: ToolRecommendations
    adrs: list[ADR]
    diagrams: DiagramSet
    cost: CostEstimate
    risks: list[DependencyRisk] = Field(default_factory=list)
    enrichment: InputEnrichment | None = None
    clarifications: list[ClarificationQA] = Field(default_factory=list)
    research_mode: str = Field(default="local", description="'remote' or 'local'")
    adr_mode: str = Field(default="local", description="'remote' or 'local'")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
