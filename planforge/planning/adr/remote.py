# planforge/planning/adr/remote.py
"""Remote-reasoning ADR generation with response normalization."""

import json
import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from planforge.errors import MalformedResponseError
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.json_extract import extract_json
from planforge.planning.prompts import load_prompt
from planforge.planning.schemas import (
    ADR,
    MAX_ADRS,
    ClarificationQA,
    InputEnrichment,
    ProjectSummary,
    ResearchResult,
)

logger = logging.getLogger(__name__)

MIN_ADRS = 5
MAX_CONSEQUENCES = 5
MAX_ALTERNATIVES = 3


def _dump(model) -> str:
    return json.dumps(model.model_dump(mode="json", by_alias=True), indent=2)


def build_adr_prompt(
    summary: ProjectSummary,
    research: ResearchResult,
    enrichment: InputEnrichment | None = None,
    clarifications: list[ClarificationQA] | None = None,
) -> str:
    enrichment_block = f"ENRICHMENT DATA:\n{_dump(enrichment)}" if enrichment else ""
    clarification_block = ""
    if clarifications:
        answered = [qa.model_dump(mode="json", by_alias=True) for qa in clarifications]
        clarification_block = f"CLARIFICATION Q&A:\n{json.dumps(answered, indent=2)}"
    return load_prompt("adrs").format(
        summary_json=_dump(summary),
        research_json=_dump(research),
        enrichment_block=enrichment_block,
        clarification_block=clarification_block,
    )


def parse_adr_response(raw_output: str, today: date | None = None) -> list[ADR]:
    """
    Parse, truncate to eight, renumber and validate remote ADRs.

    Raises:
        MalformedResponseError: Not an array, fewer than five usable ADRs,
            or an entry that fails validation
    """
    data: Any = extract_json(raw_output, prefer="array")
    if isinstance(data, dict) and isinstance(data.get("adrs"), list):
        data = data["adrs"]
    if not isinstance(data, list):
        raise MalformedResponseError("ADR response is not a JSON array")

    entries = [e for e in data if isinstance(e, dict)][:MAX_ADRS]
    if len(entries) < MIN_ADRS:
        raise MalformedResponseError(
            f"ADR response has {len(entries)} records, expected at least {MIN_ADRS}"
        )

    today = today or date.today()
    adrs = []
    for index, entry in enumerate(entries, start=1):
        normalized = {
            **entry,
            "id": index,
            "status": entry.get("status") or "accepted",
            "consequences": list(entry.get("consequences") or [])[:MAX_CONSEQUENCES],
            "alternatives": list(entry.get("alternatives") or [])[:MAX_ALTERNATIVES],
            "dateCreated": today,
        }
        normalized.pop("date_created", None)
        try:
            adrs.append(ADR.model_validate(normalized))
        except ValidationError as e:
            raise MalformedResponseError(f"ADR {index} failed validation: {e}") from e
    return adrs


class RemoteAdrGenerator:
    """ADRs from one remote reasoning call."""

    def __init__(self, client: AnthropicReasoningClient, max_tokens: int = 8000):
        self._client = client
        self._max_tokens = max_tokens

    async def generate(
        self,
        summary: ProjectSummary,
        research: ResearchResult,
        enrichment: InputEnrichment | None = None,
        clarifications: list[ClarificationQA] | None = None,
        today: date | None = None,
    ) -> list[ADR]:
        prompt = build_adr_prompt(summary, research, enrichment, clarifications)
        raw = await self._client.generate(prompt, max_tokens=self._max_tokens)
        adrs = parse_adr_response(raw, today)
        logger.info(f"Generated {len(adrs)} remote ADRs for '{summary.project_name}'")
        return adrs
