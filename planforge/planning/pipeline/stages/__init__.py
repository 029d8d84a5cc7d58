# planforge/planning/pipeline/stages/__init__.py
"""
Pipeline stage implementations.

Exports the seven planning stages and create_stages(), which wires the
dual-mode stages to the configured reasoning client.
"""

from typing import TYPE_CHECKING

from planforge.planning.adr import AdrGenerator
from planforge.planning.pipeline.stages.adrs import AdrStage
from planforge.planning.pipeline.stages.base import PipelineStage, PlanRequest, StageResult
from planforge.planning.pipeline.stages.derived import (
    CostStage,
    DiagramStage,
    RiskStage,
    TeamStage,
    ToolsStage,
)
from planforge.planning.pipeline.stages.research import ResearchStage
from planforge.planning.research import Researcher

if TYPE_CHECKING:
    from planforge.config.schema import PlannerConfig
    from planforge.llm.client import AnthropicReasoningClient

STAGE_ORDER = ("research", "team", "tools", "adrs", "diagrams", "cost", "risks")


def create_stages(
    config: "PlannerConfig | None" = None,
    client: "AnthropicReasoningClient | None" = None,
) -> list[PipelineStage]:
    """
    Create the pipeline stages in dependency order.

    Args:
        config: PlannerConfig with stage policies (None uses defaults)
        client: Reasoning client (None runs every stage locally)

    Returns:
        Ordered list of configured pipeline stages
    """
    if config is None:
        researcher = Researcher(client)
        adr_generator = AdrGenerator(client)
    else:
        researcher = Researcher.from_config(config, client)
        adr_generator = AdrGenerator.from_config(config, client)

    return [
        ResearchStage(researcher),
        TeamStage(),
        ToolsStage(),
        AdrStage(adr_generator),
        DiagramStage(),
        CostStage(),
        RiskStage(),
    ]


__all__ = [
    "AdrStage",
    "CostStage",
    "DiagramStage",
    "PipelineStage",
    "PlanRequest",
    "ResearchStage",
    "RiskStage",
    "STAGE_ORDER",
    "StageResult",
    "TeamStage",
    "ToolsStage",
    "create_stages",
]
