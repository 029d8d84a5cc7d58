# planforge/planning/schemas/project.py
"""Pipeline inputs: project summary, optional enrichment and clarification answers."""

from pydantic import Field, field_validator

from .base import PlannerModel


class TechStackHints(PlannerModel):
    """Technology preferences stated in the project description."""

    backend: list[str] = Field(default_factory=list)
    frontend: list[str] = Field(default_factory=list)
    database: str | None = None


class ProjectSummary(PlannerModel):
    """Normalized project facts produced by the input parser."""

    project_name: str = Field(..., min_length=1)
    description: str = ""
    features: list[str] = Field(default_factory=list)
    tech_stack: TechStackHints = Field(default_factory=TechStackHints)
    timeline: str | None = None
    team_size: str | None = None
    constraints: list[str] = Field(default_factory=list)

    @field_validator("team_size", mode="before")
    @classmethod
    def _team_size_as_text(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator("features", "constraints", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or []


class FeaturePriority(PlannerModel):
    feature: str
    priority: str


class NfrPerformance(PlannerModel):
    page_load_ms: int | None = None
    api_response_ms: int | None = None
    concurrent_users: int | None = None


class NfrSecurity(PlannerModel):
    authentication_method: str | None = None
    encryption_at_rest: bool = False
    compliance_standards: list[str] = Field(default_factory=list)


class NfrScalability(PlannerModel):
    expected_users: int | None = None
    peak_load: int | None = None
    data_volume: str | None = None


class NfrAccessibility(PlannerModel):
    wcag_level: str | None = None
    screen_reader_support: bool = False


class Persona(PlannerModel):
    name: str
    role: str = ""
    goals: list[str] = Field(default_factory=list)


class InputEnrichment(PlannerModel):
    """Optional non-functional requirements and preferences that sharpen heuristics."""

    feature_priorities: list[FeaturePriority] = Field(default_factory=list)
    nfr_performance: NfrPerformance | None = None
    nfr_security: NfrSecurity | None = None
    nfr_scalability: NfrScalability | None = None
    nfr_accessibility: NfrAccessibility | None = None
    personas: list[Persona] = Field(default_factory=list)
    approach_preference: str | None = None
    budget_constraint: str | None = Field(default=None, description="low, medium or high")
    complexity_slider: int | None = Field(default=None, ge=1, le=10)
    scalability_tier: str | None = Field(
        default=None, description="small, medium, large or enterprise"
    )
    architecture_style: str | None = Field(default=None, description="'auto' means no preference")

    @field_validator("budget_constraint", "scalability_tier", mode="before")
    @classmethod
    def _lowercase(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ClarificationQA(PlannerModel):
    """One answered (or skipped) clarification question."""

    question: str
    answer: str = ""
    skipped: bool = False
