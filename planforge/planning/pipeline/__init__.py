# planforge/planning/pipeline/__init__.py
"""
Planning pipeline: staged execution and build spec rendering.

Research runs first; team, tools, ADRs, diagrams, cost and dependency risk
derive from it in a fixed order.
"""

from planforge.planning.pipeline.orchestrator import PipelineResult, PlanningPipeline
from planforge.planning.pipeline.output import BuildSpecRenderer, slugify
from planforge.planning.pipeline.stages import (
    STAGE_ORDER,
    PipelineStage,
    PlanRequest,
    StageResult,
    create_stages,
)

__all__ = [
    "BuildSpecRenderer",
    "PipelineResult",
    "PipelineStage",
    "PlanRequest",
    "PlanningPipeline",
    "STAGE_ORDER",
    "StageResult",
    "create_stages",
    "slugify",
]
