# planforge/planning/adr/generator.py
"""
ADR stage entry point.

Tries the remote path on every call when a client exists and degrades to
the templated local ADRs on any remote failure.
"""

import logging
from datetime import date

from planforge.config.schema import PlannerConfig
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.dual_mode import ReasoningPolicy, run_with_policy
from planforge.planning.schemas import (
    ADR,
    ClarificationQA,
    InputEnrichment,
    ProjectSummary,
    ResearchResult,
)

from .local import LocalAdrGenerator
from .remote import RemoteAdrGenerator

logger = logging.getLogger(__name__)


class AdrGenerator:
    """Dual-mode ADR generator with runtime fallback."""

    def __init__(
        self,
        client: AnthropicReasoningClient | None = None,
        policy: ReasoningPolicy | None = None,
        max_tokens: int = 8000,
    ):
        self._local = LocalAdrGenerator()
        self._remote = RemoteAdrGenerator(client, max_tokens) if client is not None else None
        self.policy = policy or ReasoningPolicy.degrade(self._remote is not None)
        self.last_mode = "local"

    @classmethod
    def from_config(
        cls, config: PlannerConfig, client: AnthropicReasoningClient | None
    ) -> "AdrGenerator":
        policy = ReasoningPolicy(
            attempt_remote=client is not None,
            fallback_on_error=config.adrs.fallback_to_local,
        )
        return cls(client, policy, max_tokens=config.anthropic.max_tokens_adrs)

    async def generate_adrs(
        self,
        summary: ProjectSummary,
        research: ResearchResult,
        enrichment: InputEnrichment | None = None,
        clarifications: list[ClarificationQA] | None = None,
        today: date | None = None,
    ) -> list[ADR]:
        """Return five to eight ADRs with ids 1..n."""
        async def remote() -> list[ADR]:
            return await self._remote.generate(
                summary, research, enrichment, clarifications, today
            )

        adrs, self.last_mode = await run_with_policy(
            "adrs",
            self.policy,
            remote if self._remote is not None else None,
            lambda: self._local.generate(summary, research, enrichment, clarifications, today),
        )
        return adrs
