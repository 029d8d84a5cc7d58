# planforge/planning/schemas/quality.py
"""Schema for the build-spec quality report."""

from typing import Literal

from pydantic import Field

from .base import PlannerModel


class ValidationIssue(PlannerModel):
    section: str
    field: str
    message: str
    severity: Literal["critical", "major", "minor"] = "major"


class ValidationNote(PlannerModel):
    section: str
    field: str
    message: str


class VagueTermFinding(PlannerModel):
    term: str
    location: str
    suggestion: str


class MissingDetail(PlannerModel):
    section: str
    what_is_missing: str


class QualityReport(PlannerModel):
    overall_score: int = Field(..., ge=0, le=100)
    section_scores: dict[str, int] = Field(default_factory=dict)
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationNote] = Field(default_factory=list)
    suggestions: list[ValidationNote] = Field(default_factory=list)
    vague_terms_found: list[VagueTermFinding] = Field(default_factory=list)
    missing_details: list[MissingDetail] = Field(default_factory=list)
    passed_quality_gate: bool
    required_fixes: list[str] = Field(default_factory=list)

    @property
    def critical_errors(self) -> list[ValidationIssue]:
        return [e for e in self.errors if e.severity == "critical"]
