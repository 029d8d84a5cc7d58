# planforge/planning/research/remote.py
"""Remote-reasoning researcher: one structured prompt, strict response checks."""

import logging

from pydantic import ValidationError

from planforge.errors import MalformedResponseError
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.json_extract import extract_json_object
from planforge.planning.prompts import load_prompt
from planforge.planning.schemas import (
    REQUIRED_RESEARCH_KEYS,
    ProjectSummary,
    ResearchResult,
)

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"


def build_research_prompt(summary: ProjectSummary) -> str:
    hints = summary.tech_stack
    return load_prompt("research").format(
        project_name=summary.project_name,
        description=summary.description or NOT_SPECIFIED,
        features=", ".join(summary.features) or NOT_SPECIFIED,
        backend=", ".join(hints.backend) or NOT_SPECIFIED,
        frontend=", ".join(hints.frontend) or NOT_SPECIFIED,
        database=hints.database or NOT_SPECIFIED,
        timeline=summary.timeline or NOT_SPECIFIED,
        team_size=summary.team_size or NOT_SPECIFIED,
        constraints=", ".join(summary.constraints) or "None",
    )


def parse_research_response(raw_output: str) -> ResearchResult:
    """
    Parse the research JSON.

    Raises:
        MalformedResponseError: No JSON, or JSON that does not fit the schema
        MissingFieldError: A required top-level key is absent
    """
    data = extract_json_object(raw_output, REQUIRED_RESEARCH_KEYS)
    if not isinstance(data["requiredFeatures"], list):
        raise MalformedResponseError("requiredFeatures must be an array")
    try:
        return ResearchResult.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Research response failed validation: {e}") from e


class RemoteResearcher:
    """Research through the remote reasoning client; never falls back itself."""

    def __init__(self, client: AnthropicReasoningClient, max_tokens: int = 4000):
        self._client = client
        self._max_tokens = max_tokens

    async def analyze(self, summary: ProjectSummary) -> ResearchResult:
        logger.info(f"Remote research for '{summary.project_name}'")
        raw = await self._client.generate(
            build_research_prompt(summary), max_tokens=self._max_tokens
        )
        result = parse_research_response(raw)
        logger.info(
            f"Remote research complete: features={len(result.required_features)}, "
            f"complexity={result.estimated_complexity}"
        )
        return result
