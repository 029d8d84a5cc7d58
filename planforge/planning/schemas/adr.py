# planforge/planning/schemas/adr.py
"""Schema for Architecture Decision Records."""

from datetime import date

from pydantic import Field

from .base import PlannerModel

MAX_ADRS = 8


class Alternative(PlannerModel):
    name: str
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class ADR(PlannerModel):
    """One architecture decision, its consequences and the rejected options."""

    id: int = Field(..., ge=1, le=MAX_ADRS)
    title: str
    status: str = "accepted"
    context: str
    decision: str
    consequences: list[str] = Field(..., min_length=3, max_length=5)
    alternatives: list[Alternative] = Field(..., min_length=2, max_length=3)
    date_created: date = Field(default_factory=date.today)
