# planforge/planning/pipeline/stages/research.py
"""Research stage: features, stack, architecture, complexity and timeline."""

import logging
from typing import Any

from planforge.planning.research import Researcher
from planforge.planning.schemas import ResearchResult

from .base import PipelineStage, PlanRequest

logger = logging.getLogger(__name__)


class ResearchStage(PipelineStage):
    """First stage; every derivation stage consumes its ResearchResult."""

    def __init__(self, researcher: Researcher | None = None):
        self._researcher = researcher or Researcher()

    @property
    def name(self) -> str:
        return "research"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.0, 0.35)

    @property
    def mode(self) -> str:
        return self._researcher.last_mode

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> ResearchResult:
        result = await self._researcher.analyze(request.summary)
        logger.info(
            f"Research: {len(result.required_features)} features, "
            f"complexity={result.estimated_complexity}, mode={self.mode}"
        )
        return result
