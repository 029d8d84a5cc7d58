# planforge/planning/schemas/cost.py
"""Schema for the cost estimate."""

from typing import Literal

from pydantic import Field, model_validator

from .base import PlannerModel

CostCategory = Literal[
    "hosting", "database", "storage", "bandwidth", "third-party", "developer", "other"
]


class CostItem(PlannerModel):
    """A monthly line item; annual defaults to monthly x 12 unless given."""

    service: str
    category: CostCategory
    monthly_estimate: float = Field(..., ge=0)
    annual_estimate: float = Field(default=0, ge=0)
    tier: str = ""
    assumptions: list[str] = Field(default_factory=list)
    scaling_notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_annual(cls, data):
        if isinstance(data, dict):
            has_annual = any(
                data.get(k) is not None for k in ("annual_estimate", "annualEstimate")
            )
            monthly = data.get("monthly_estimate", data.get("monthlyEstimate"))
            if not has_annual and monthly is not None:
                data = {**data, "annual_estimate": float(monthly) * 12}
        return data


class DevelopmentCost(PlannerModel):
    total_hours: float
    hourly_rate_min: float
    hourly_rate_max: float
    total_min: float
    total_max: float


class CostEstimate(PlannerModel):
    items: list[CostItem] = Field(default_factory=list)
    total_monthly: float
    total_annual: float
    confidence: Literal["low", "medium", "high"]
    development_cost: DevelopmentCost | None = None
    notes: list[str] = Field(default_factory=list)

    @classmethod
    def from_items(
        cls,
        items: list[CostItem],
        confidence: str,
        development_cost: DevelopmentCost | None = None,
        notes: list[str] | None = None,
    ) -> "CostEstimate":
        total_monthly = sum(item.monthly_estimate for item in items)
        return cls(
            items=items,
            total_monthly=total_monthly,
            total_annual=total_monthly * 12,
            confidence=confidence,
            development_cost=development_cost,
            notes=notes or [],
        )
