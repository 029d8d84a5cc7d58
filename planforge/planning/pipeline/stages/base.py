# planforge/planning/pipeline/stages/base.py
"""
Abstract base class for pipeline stages.

Each stage reads the planning request and the outputs of earlier stages and
produces one immutable output. Stages are executed sequentially by the
PlanningPipeline.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from planforge.planning.schemas import ClarificationQA, InputEnrichment, ProjectSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanRequest:
    """
    Inputs for one planning run.

    Attributes:
        summary: Normalized project facts from the input parser
        enrichment: Optional non-functional requirements and preferences
        clarifications: Answered or skipped clarification questions
    """

    summary: ProjectSummary
    enrichment: InputEnrichment | None = None
    clarifications: list[ClarificationQA] = field(default_factory=list)


@dataclass
class StageResult:
    """
    Result of executing a pipeline stage.

    Attributes:
        stage_name: Name of the stage that produced this result
        success: Whether the stage completed successfully
        output: Stage output model (None on failure)
        mode: "remote" or "local" for dual-mode stages, "local" otherwise
        error: Error message if success=False
    """

    stage_name: str
    success: bool
    output: Any = None
    mode: str = "local"
    error: str | None = None


class PipelineStage(ABC):
    """
    Abstract base class for planning pipeline stages.

    Subclasses implement ``run`` and declare the stage outputs they read in
    ``requires``. ``execute`` turns any exception into a failed StageResult.
    """

    requires: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage name, also the key of its output in prior_outputs."""

    @property
    @abstractmethod
    def progress_range(self) -> tuple[float, float]:
        """
        Progress range this stage covers (0.0 to 1.0).

        Returns:
            Tuple of (start_progress, end_progress)
        """

    @abstractmethod
    async def run(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> Any:
        """
        Produce this stage's output.

        Args:
            request: Planning inputs
            prior_outputs: Dictionary mapping stage_name -> output model

        Returns:
            The stage output model
        """

    @property
    def mode(self) -> str:
        return "local"

    async def execute(self, request: PlanRequest, prior_outputs: dict[str, Any]) -> StageResult:
        missing = [name for name in self.requires if name not in prior_outputs]
        if missing:
            error = f"missing prior output(s): {', '.join(missing)}"
            logger.error(f"Stage '{self.name}' cannot run: {error}")
            return StageResult(stage_name=self.name, success=False, error=error)

        try:
            output = await self.run(request, prior_outputs)
            return StageResult(stage_name=self.name, success=True, output=output, mode=self.mode)
        except Exception as e:
            logger.error(f"Stage '{self.name}' failed: {e}", exc_info=True)
            return StageResult(stage_name=self.name, success=False, error=str(e))
