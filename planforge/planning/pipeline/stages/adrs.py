# planforge/planning/pipeline/stages/adrs.py
"""ADR stage: five to eight decision records, remote with local fallback."""

from typing import Any

from planforge.planning.adr import AdrGenerator
from planforge.planning.schemas import ADR

from .base import PipelineStage, PlanRequest


class AdrStage(PipelineStage):
    requires = ("research",)

    def __init__(self, generator: AdrGenerator | None = None):
        self._generator = generator or AdrGenerator()

    @property
    def name(self) -> str:
        return "adrs"

    @property
    def progress_range(self) -> tuple[float, float]:
        return (0.5, 0.75)

    @property
    def mode(self) -> str:
        return self._generator.last_mode

    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> list[ADR]:
        return await self._generator.generate_adrs(
            request.summary,
            prior_outputs["research"],
            request.enrichment,
            request.clarifications,
        )
