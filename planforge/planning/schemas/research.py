# planforge/planning/schemas/research.py
"""Schema for the research stage output."""

from typing import Literal

from pydantic import Field, field_validator

from .base import PlannerModel

Priority = Literal["critical", "high", "medium", "low"]
Complexity = Literal["low", "medium", "high"]


class Feature(PlannerModel):
    """A required feature with derived priority, complexity and effort."""

    name: str = Field(..., min_length=1)
    priority: Priority
    complexity: Complexity
    estimated_hours: float = Field(..., gt=0)

    @field_validator("priority", "complexity", mode="before")
    @classmethod
    def _lowercase(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class FrameworkChoice(PlannerModel):
    framework: str
    reasoning: str = ""


class DatabaseChoice(PlannerModel):
    type: str
    reasoning: str = ""


class TechStackRecommendation(PlannerModel):
    backend: FrameworkChoice | None = None
    frontend: FrameworkChoice | None = None
    database: DatabaseChoice | None = None


class ArchitectureChoice(PlannerModel):
    pattern: str
    reasoning: str = ""


class ResearchResult(PlannerModel):
    """Features, stack, architecture and sizing derived from a ProjectSummary."""

    required_features: list[Feature] = Field(default_factory=list)
    recommended_tech_stack: TechStackRecommendation
    architecture: ArchitectureChoice
    estimated_complexity: Complexity
    estimated_timeline: str

    @field_validator("estimated_complexity", mode="before")
    @classmethod
    def _lowercase(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def feature_names(self) -> list[str]:
        return [f.name for f in self.required_features]

    @property
    def database_type(self) -> str:
        db = self.recommended_tech_stack.database
        return db.type if db else "PostgreSQL"


REQUIRED_RESEARCH_KEYS = (
    "requiredFeatures",
    "recommendedTechStack",
    "architecture",
    "estimatedComplexity",
    "estimatedTimeline",
)
