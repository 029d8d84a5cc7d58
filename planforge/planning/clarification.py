# planforge/planning/clarification.py
"""
Clarifying questions that would sharpen the build spec.

Questions come from one remote reasoning call when a client exists, and from
rules over the gaps in the enrichment data otherwise or on remote failure.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from planforge.config.schema import PlannerConfig
from planforge.errors import MalformedResponseError
from planforge.llm.client import AnthropicReasoningClient
from planforge.planning.dual_mode import ReasoningPolicy, run_with_policy
from planforge.planning.json_extract import extract_json
from planforge.planning.prompts import load_prompt
from planforge.planning.rules import any_feature_matches
from planforge.planning.schemas import InputEnrichment, ProjectSummary, ResearchResult

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 5
MANY_FEATURES = 8


@dataclass(frozen=True)
class QuestionRule:
    """Ask ``question`` when ``applies`` holds for the gathered context."""

    question: str
    applies: Callable[[ProjectSummary, ResearchResult, InputEnrichment], bool]


def _has_auth_feature(research: ResearchResult) -> bool:
    return any_feature_matches(research.feature_names, ("auth", "login", "user"))


def _has_user_data(summary: ProjectSummary) -> bool:
    return any_feature_matches(summary.features, ("user", "profile", "account"))


def _lacks_compliance(e: InputEnrichment) -> bool:
    return e.nfr_security is None or not e.nfr_security.compliance_standards


QUESTION_RULES: tuple[QuestionRule, ...] = (
    QuestionRule(
        "Who are the primary users of this application? "
        "(e.g., admin users, end customers, team members)",
        lambda s, r, e: not e.personas,
    ),
    QuestionRule(
        "How many concurrent users do you expect at launch, and what is the expected peak load?",
        lambda s, r, e: e.nfr_scalability is None,
    ),
    QuestionRule(
        "Which features are critical for the initial MVP, and which can be deferred to later versions?",
        lambda s, r, e: len(s.features) > MANY_FEATURES and not e.feature_priorities,
    ),
    QuestionRule(
        "What level of authentication is required? "
        "(e.g., email/password, social login, 2FA, SSO)",
        lambda s, r, e: _has_auth_feature(r) and e.nfr_security is None,
    ),
    QuestionRule(
        "Should we build the API first (backend-driven development) "
        "or the UI first (frontend-driven development)?",
        lambda s, r, e: not e.approach_preference,
    ),
    QuestionRule(
        "Are there specific performance requirements? "
        "(e.g., page load time, API response time, real-time features)",
        lambda s, r, e: e.nfr_performance is None and r.estimated_complexity == "high",
    ),
    QuestionRule(
        "What is your expected scale? "
        "(small: <1K users, medium: 1K-10K, large: 10K-100K, enterprise: 100K+)",
        lambda s, r, e: r.estimated_complexity != "low" and not e.scalability_tier,
    ),
    QuestionRule(
        "What is your budget for infrastructure and third-party services? "
        "(low: <$50/mo, medium: $50-500/mo, high: $500+/mo)",
        lambda s, r, e: not e.budget_constraint,
    ),
    QuestionRule(
        "Are there data privacy or compliance requirements? (e.g., GDPR, HIPAA, SOC 2)",
        lambda s, r, e: _has_user_data(s) and _lacks_compliance(e),
    ),
)


def local_questions(
    summary: ProjectSummary,
    research: ResearchResult,
    enrichment: InputEnrichment | None = None,
) -> list[str]:
    """Rule-based questions for the gaps in ``enrichment``, at most five."""
    enrichment = enrichment or InputEnrichment()
    questions = [
        rule.question for rule in QUESTION_RULES if rule.applies(summary, research, enrichment)
    ]
    return questions[:MAX_QUESTIONS]


def _dump(model) -> str:
    return json.dumps(model.model_dump(mode="json", by_alias=True), indent=2)


def build_clarification_prompt(
    summary: ProjectSummary,
    research: ResearchResult,
    enrichment: InputEnrichment | None = None,
) -> str:
    enrichment_block = (
        f"CURRENT ENRICHMENT DATA:\n{_dump(enrichment)}"
        if enrichment
        else "NO ENRICHMENT DATA PROVIDED YET"
    )
    return load_prompt("clarification").format(
        summary_json=_dump(summary),
        research_json=_dump(research),
        enrichment_block=enrichment_block,
    )


def parse_questions(raw_output: str) -> list[str]:
    """
    Parse a JSON array of question strings, keeping the first five.

    Raises:
        MalformedResponseError: Not a non-empty array of strings
    """
    data = extract_json(raw_output, prefer="array")
    if not isinstance(data, list):
        raise MalformedResponseError("Clarification response is not a JSON array")
    questions = [q.strip() for q in data if isinstance(q, str) and q.strip()]
    if not questions:
        raise MalformedResponseError("Clarification response has no questions")
    return questions[:MAX_QUESTIONS]


class ClarificationGenerator:
    """Dual-mode question generator; remote failures degrade to the local rules."""

    def __init__(
        self,
        client: AnthropicReasoningClient | None = None,
        policy: ReasoningPolicy | None = None,
        max_tokens: int = 1000,
    ):
        self._client = client
        self._max_tokens = max_tokens
        self.policy = policy or ReasoningPolicy.degrade(client is not None)
        self.last_mode = "local"

    @classmethod
    def from_config(
        cls, config: PlannerConfig, client: AnthropicReasoningClient | None
    ) -> "ClarificationGenerator":
        return cls(client, max_tokens=config.anthropic.max_tokens_clarification)

    async def generate_questions(
        self,
        summary: ProjectSummary,
        research: ResearchResult,
        enrichment: InputEnrichment | None = None,
    ) -> list[str]:
        async def remote() -> list[str]:
            raw = await self._client.generate(
                build_clarification_prompt(summary, research, enrichment),
                max_tokens=self._max_tokens,
            )
            return parse_questions(raw)

        questions, self.last_mode = await run_with_policy(
            "clarification",
            self.policy,
            remote if self._client is not None else None,
            lambda: local_questions(summary, research, enrichment),
        )
        logger.info(f"Generated {len(questions)} clarification questions ({self.last_mode})")
        return questions
