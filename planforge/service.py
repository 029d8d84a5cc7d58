# planforge/service.py
"""
Service layer shared by the CLI and library callers.

Runs the pipeline, renders the build spec, scores it, and writes the
artifacts to disk.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from planforge.config.schema import PlannerConfig
from planforge.errors import PipelineAbortedError, PlannerError
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.clarification import ClarificationGenerator
from planforge.planning.pipeline import (
    BuildSpecRenderer,
    PlanningPipeline,
    PlanRequest,
    create_stages,
    slugify,
)
from planforge.planning.pipeline.orchestrator import ProgressCallback
from planforge.planning.quality import QualityValidator
from planforge.planning.research import Researcher
from planforge.planning.schemas import (
    ClarificationQA,
    InputEnrichment,
    PlanOutput,
    ProjectSummary,
    QualityReport,
)

logger = logging.getLogger(__name__)


@dataclass
class PlanArtifacts:
    """
    Everything one planning run produces.

    Attributes:
        plan: Aggregated stage outputs
        document: Rendered build spec markdown
        decisions: Rendered decisions YAML
        report: Quality report for the document
    """

    plan: PlanOutput
    document: str
    decisions: str
    report: QualityReport


def read_record(path: Path) -> Any:
    """Read a JSON or YAML file (JSON is valid YAML)."""
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PlannerError(f"Could not parse {path}: {e}") from e


def load_summary(path: Path) -> ProjectSummary:
    try:
        return ProjectSummary.model_validate(read_record(path) or {})
    except ValidationError as e:
        raise PlannerError(f"Invalid project summary in {path}: {e}") from e


def load_enrichment(path: Path) -> InputEnrichment:
    try:
        return InputEnrichment.model_validate(read_record(path) or {})
    except ValidationError as e:
        raise PlannerError(f"Invalid enrichment in {path}: {e}") from e


def load_clarifications(path: Path) -> list[ClarificationQA]:
    data = read_record(path) or []
    if isinstance(data, dict):
        data = data.get("clarifications", [])
    if not isinstance(data, list):
        raise PlannerError(f"Clarifications in {path} must be a list")
    try:
        return [ClarificationQA.model_validate(item) for item in data]
    except ValidationError as e:
        raise PlannerError(f"Invalid clarification in {path}: {e}") from e


async def create_plan(
    summary: ProjectSummary,
    enrichment: InputEnrichment | None = None,
    clarifications: list[ClarificationQA] | None = None,
    config: PlannerConfig | None = None,
    client: AnthropicReasoningClient | None = None,
    progress_callback: ProgressCallback | None = None,
) -> PlanArtifacts:
    """
    Run the full pipeline and score the result.

    Args:
        summary: Parsed project summary
        enrichment: Optional non-functional requirements and preferences
        clarifications: Optional answered clarification questions
        config: PlannerConfig (None uses defaults)
        client: Reasoning client (None runs every stage locally)
        progress_callback: Optional callback(progress, phase)

    Returns:
        PlanArtifacts with the plan, rendered documents and quality report

    Raises:
        PipelineAbortedError: If a stage fails
    """
    config = config or PlannerConfig()
    request = PlanRequest(
        summary=summary, enrichment=enrichment, clarifications=list(clarifications or [])
    )
    pipeline = PlanningPipeline(create_stages(config, client))
    result = await pipeline.execute(request, progress_callback)
    if not result.success:
        raise PipelineAbortedError(result.failed_stage or "unknown", result.error or "unknown error")

    plan = result.to_plan_output(request)
    renderer = BuildSpecRenderer()
    document = renderer.render(plan)
    decisions = renderer.render_decisions(plan)
    validator = QualityValidator(config.quality.min_score, config.quality.max_vague_terms)
    report = validator.validate(document, decisions)
    logger.info(
        f"Plan for '{summary.project_name}' complete: score={report.overall_score}, "
        f"passed={report.passed_quality_gate}"
    )
    return PlanArtifacts(plan=plan, document=document, decisions=decisions, report=report)


async def generate_questions(
    summary: ProjectSummary,
    enrichment: InputEnrichment | None = None,
    config: PlannerConfig | None = None,
    client: AnthropicReasoningClient | None = None,
) -> list[str]:
    """
    Research the project and return clarifying questions for it.

    Raises:
        PipelineAbortedError: If the research stage fails
    """
    config = config or PlannerConfig()
    researcher = Researcher.from_config(config, client)
    try:
        research = await researcher.analyze(summary)
    except PlannerError as e:
        raise PipelineAbortedError("research", str(e)) from e
    generator = ClarificationGenerator.from_config(config, client)
    return await generator.generate_questions(summary, research, enrichment)


def write_plan(artifacts: PlanArtifacts, output_dir: Path) -> tuple[Path, Path]:
    """
    Write the build spec and decisions files.

    Returns:
        (spec_path, decisions_path)
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    slug = slugify(artifacts.plan.summary.project_name)
    spec_path = output_dir / f"{slug}.md"
    decisions_path = output_dir / f"{slug}-decisions.yaml"
    spec_path.write_text(artifacts.document, encoding="utf-8")
    decisions_path.write_text(artifacts.decisions, encoding="utf-8")
    logger.info(f"Wrote {spec_path} and {decisions_path}")
    return spec_path, decisions_path
