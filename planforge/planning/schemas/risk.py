# planforge/planning/schemas/risk.py
"""Schema for dependency risk findings."""

from typing import Literal

from pydantic import Field

from .base import PlannerModel

RiskLevel = Literal["low", "medium", "high", "critical"]
RiskCategory = Literal["security", "maintenance", "performance", "compatibility", "licensing"]


class DependencyRisk(PlannerModel):
    package_name: str
    risk_level: RiskLevel
    risk_factors: list[str] = Field(..., min_length=1)
    mitigation: str = Field(..., min_length=1)
    alternatives: list[str] | None = None
    category: RiskCategory | None = None
