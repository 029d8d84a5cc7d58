# planforge/planning/research/researcher.py
"""
Research stage entry point.

The mode is fixed when the Researcher is built: remote when a reasoning
client exists, local otherwise. A remote failure is fatal unless the policy
was built with fallback enabled.
"""

import logging

from planforge.config.schema import PlannerConfig
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.dual_mode import ReasoningPolicy, run_with_policy
from planforge.planning.schemas import ProjectSummary, ResearchResult

from .local import LocalResearcher
from .remote import RemoteResearcher

logger = logging.getLogger(__name__)


class Researcher:
    """Dual-mode researcher with the mode selected once, at construction."""

    def __init__(
        self,
        client: AnthropicReasoningClient | None = None,
        policy: ReasoningPolicy | None = None,
        max_tokens: int = 4000,
    ):
        self._local = LocalResearcher()
        self._remote = RemoteResearcher(client, max_tokens) if client is not None else None
        self.policy = policy or ReasoningPolicy.fail_fast(self._remote is not None)
        self.mode = "remote" if self._remote and self.policy.attempt_remote else "local"
        self.last_mode = self.mode
        logger.info(f"Researcher using {self.mode} mode")

    @classmethod
    def from_config(
        cls, config: PlannerConfig, client: AnthropicReasoningClient | None
    ) -> "Researcher":
        remote_available = client is not None
        policy = ReasoningPolicy(
            attempt_remote=remote_available,
            fallback_on_error=config.research.fallback_to_local,
        )
        return cls(client, policy, max_tokens=config.anthropic.max_tokens_research)

    async def analyze(self, summary: ProjectSummary) -> ResearchResult:
        """
        Produce a ResearchResult.

        Raises:
            RemoteReasoningError: Remote mode failed and fallback is disabled
        """
        remote = (lambda: self._remote.analyze(summary)) if self.mode == "remote" else None
        result, self.last_mode = await run_with_policy(
            "research",
            self.policy,
            remote,
            lambda: self._local.research(summary),
        )
        return result
