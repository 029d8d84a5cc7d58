# planforge/planning/pipeline/orchestrator.py
"""
Multi-stage planning pipeline orchestrator.

Executes stages sequentially, passes outputs forward and stops at the first
failed stage.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from planforge.planning.pipeline.stages.base import PipelineStage, PlanRequest
from planforge.planning.schemas import PlanOutput

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    Result of executing the full planning pipeline.

    Attributes:
        success: Whether all stages completed successfully
        outputs: Dictionary mapping stage_name -> stage output
        modes: Dictionary mapping stage_name -> "remote" or "local"
        failed_stage: Name of the stage that failed (if success=False)
        error: Error message (if success=False)
    """

    success: bool
    outputs: dict[str, Any]
    modes: dict[str, str] = field(default_factory=dict)
    failed_stage: str | None = None
    error: str | None = None

    def to_plan_output(self, request: PlanRequest) -> PlanOutput:
        """
        Assemble the stage outputs into one PlanOutput.

        Raises:
            ValueError: If the pipeline did not complete
        """
        if not self.success:
            raise ValueError(f"Pipeline failed at stage '{self.failed_stage}': {self.error}")
        return PlanOutput(
            summary=request.summary,
            research=self.outputs["research"],
            team=self.outputs["team"],
            tools=self.outputs["tools"],
            adrs=self.outputs["adrs"],
            diagrams=self.outputs["diagrams"],
            cost=self.outputs["cost"],
            risks=self.outputs["risks"],
            enrichment=request.enrichment,
            clarifications=request.clarifications,
            research_mode=self.modes.get("research", "local"),
            adr_mode=self.modes.get("adrs", "local"),
        )


ProgressCallback = Callable[[float, str], None] | Callable[[float, str], Any]


class PlanningPipeline:
    """
    Multi-stage planning pipeline orchestrator.

    Executes stages sequentially, with each stage receiving outputs from
    all prior stages. Upstream outputs are never modified by later stages.

    Example:
        pipeline = PlanningPipeline(create_stages(config, client))
        result = await pipeline.execute(PlanRequest(summary=summary))
    """

    def __init__(self, stages: list[PipelineStage]) -> None:
        """
        Initialize planning pipeline.

        Args:
            stages: Ordered list of pipeline stages (executed in sequence)
        """
        self._stages = stages
        logger.info(f"Created PlanningPipeline with {len(stages)} stages")

    @property
    def stage_names(self) -> list[str]:
        return [stage.name for stage in self._stages]

    async def _notify(
        self, progress_callback: ProgressCallback | None, progress: float, phase: str
    ) -> None:
        if progress_callback:
            result_or_coro = progress_callback(progress, phase)
            if hasattr(result_or_coro, "__await__"):
                await result_or_coro

    async def execute(
        self,
        request: PlanRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> PipelineResult:
        """
        Execute the planning pipeline.

        Args:
            request: Planning inputs
            progress_callback: Optional callback(progress, phase) for updates;
                may be sync or async

        Returns:
            PipelineResult with all stage outputs or the first failure
        """
        prior_outputs: dict[str, Any] = {}
        modes: dict[str, str] = {}
        logger.info(
            f"Executing {len(self._stages)} stages for '{request.summary.project_name}': "
            f"{self.stage_names}"
        )

        for stage in self._stages:
            logger.info(f"Executing stage: {stage.name}")
            await self._notify(progress_callback, stage.progress_range[0], stage.name)

            result = await stage.execute(request, prior_outputs)

            if not result.success:
                logger.error(f"[{stage.name}] Stage failed: {result.error}")
                return PipelineResult(
                    success=False,
                    outputs=prior_outputs,
                    modes=modes,
                    failed_stage=stage.name,
                    error=result.error,
                )

            prior_outputs[stage.name] = result.output
            modes[stage.name] = result.mode
            await self._notify(progress_callback, stage.progress_range[1], f"{stage.name}_complete")

        logger.info("Pipeline completed successfully")
        return PipelineResult(success=True, outputs=prior_outputs, modes=modes)
