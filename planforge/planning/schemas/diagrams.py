# planforge/planning/schemas/diagrams.py
"""Schema for generated Mermaid diagram sources."""

from pydantic import Field

from .base import PlannerModel


class SequenceDiagram(PlannerModel):
    title: str
    source: str


class DiagramSet(PlannerModel):
    system_context: str
    container: str
    entity_relationship: str
    sequences: list[SequenceDiagram] = Field(default_factory=list)
