# planforge/planning/schemas/__init__.py
"""Pydantic schemas for pipeline inputs, stage outputs and reports."""

from .adr import ADR, MAX_ADRS, Alternative
from .base import PlannerModel
from .cost import CostEstimate, CostItem, DevelopmentCost
from .diagrams import DiagramSet, SequenceDiagram
from .plan_output import PlanOutput
from .project import (
    ClarificationQA,
    FeaturePriority,
    InputEnrichment,
    NfrAccessibility,
    NfrPerformance,
    NfrScalability,
    NfrSecurity,
    Persona,
    ProjectSummary,
    TechStackHints,
)
from .quality import (
    MissingDetail,
    QualityReport,
    VagueTermFinding,
    ValidationIssue,
    ValidationNote,
)
from .research import (
    REQUIRED_RESEARCH_KEYS,
    ArchitectureChoice,
    DatabaseChoice,
    Feature,
    FrameworkChoice,
    ResearchResult,
    TechStackRecommendation,
)
from .risk import DependencyRisk
from .team import AgentDefinition, AgentTeam
from .tools import ToolRecommendation, ToolRecommendations

__all__ = [
    "ADR",
    "MAX_ADRS",
    "REQUIRED_RESEARCH_KEYS",
    "AgentDefinition",
    "AgentTeam",
    "Alternative",
    "ArchitectureChoice",
    "ClarificationQA",
    "CostEstimate",
    "CostItem",
    "DatabaseChoice",
    "DependencyRisk",
    "DevelopmentCost",
    "DiagramSet",
    "Feature",
    "FeaturePriority",
    "FrameworkChoice",
    "InputEnrichment",
    "MissingDetail",
    "NfrAccessibility",
    "NfrPerformance",
    "NfrScalability",
    "NfrSecurity",
    "Persona",
    "PlanOutput",
    "PlannerModel",
    "ProjectSummary",
    "QualityReport",
    "ResearchResult",
    "SequenceDiagram",
    "TechStackHints",
    "TechStackRecommendation",
    "ToolRecommendation",
    "ToolRecommendations",
    "VagueTermFinding",
    "ValidationIssue",
    "ValidationNote",
]
