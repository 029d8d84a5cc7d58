# planforge/planning/research/local.py
"""
Local heuristic researcher.

Deterministic keyword inference over a ProjectSummary. Never raises on
well-formed input: zero features or an empty description still produce a
complete ResearchResult.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from planforge.planning import rules
from planforge.planning.rules import Rule, RuleTable, has_any, keywords
from planforge.planning.schemas import (
    ArchitectureChoice,
    DatabaseChoice,
    Feature,
    FrameworkChoice,
    ProjectSummary,
    ResearchResult,
    TechStackRecommendation,
)

logger = logging.getLogger(__name__)

HOURS_PER_WEEK = 40

DEFAULT_BACKEND = FrameworkChoice(
    framework="Express.js with TypeScript",
    reasoning="Fast development, strong ecosystem, TypeScript for type safety",
)
DEFAULT_FRONTEND = FrameworkChoice(
    framework="Next.js 14 with App Router",
    reasoning="Server components, excellent DX, SEO-friendly, modern React",
)
DEFAULT_DATABASE_TYPE = "PostgreSQL"
DEFAULT_DATABASE_REASONING = "ACID compliance, excellent for structured data, scalable"

BACKEND_HINTS: RuleTable[FrameworkChoice] = RuleTable(
    rules=(
        Rule(
            keywords("node"),
            FrameworkChoice(
                framework="Express.js with TypeScript",
                reasoning="Matches stated preference for Node.js, excellent ecosystem",
            ),
        ),
        Rule(
            keywords("python"),
            FrameworkChoice(
                framework="FastAPI with Python",
                reasoning="Matches Python preference, excellent for APIs and async operations",
            ),
        ),
        Rule(
            keywords("go", "golang"),
            FrameworkChoice(
                framework="Go with Gin/Echo",
                reasoning="High performance, great concurrency, matches Go preference",
            ),
        ),
    ),
    default=DEFAULT_BACKEND,
)

FRONTEND_HINTS: RuleTable[FrameworkChoice] = RuleTable(
    rules=(
        Rule(
            keywords("next"),
            FrameworkChoice(
                framework="Next.js 14 with App Router",
                reasoning="Matches Next.js preference, latest features with App Router",
            ),
        ),
        Rule(
            keywords("react"),
            FrameworkChoice(
                framework="React with Vite",
                reasoning="Fast build times, modern tooling, matches React preference",
            ),
        ),
        Rule(
            keywords("vue"),
            FrameworkChoice(
                framework="Vue 3 with Composition API",
                reasoning="Matches Vue preference, modern Composition API, great DX",
            ),
        ),
    ),
    default=DEFAULT_FRONTEND,
)

DATABASE_REASONING: RuleTable[str] = RuleTable(
    rules=(
        Rule(keywords("postgres"), "Matches stated preference, robust relational database"),
        Rule(
            keywords("mongo"),
            "Matches MongoDB preference, flexible schema, great for rapid development",
        ),
        Rule(keywords("mysql"), "Matches MySQL preference, widely supported, reliable"),
    ),
    default=DEFAULT_DATABASE_REASONING,
)


@dataclass(frozen=True)
class _ArchitectureContext:
    description: str
    solo_team: bool


ARCHITECTURE_RULES: tuple[
    tuple[Callable[[_ArchitectureContext], bool], ArchitectureChoice], ...
] = (
    (
        lambda ctx: has_any(ctx.description, ("microservice", "distributed")),
        ArchitectureChoice(
            pattern="Microservices",
            reasoning="Project explicitly mentions distributed architecture, suitable for scalability",
        ),
    ),
    (
        lambda ctx: has_any(ctx.description, ("serverless", "lambda")),
        ArchitectureChoice(
            pattern="Serverless",
            reasoning="Serverless architecture reduces operational overhead and scales automatically",
        ),
    ),
    (
        lambda ctx: ctx.solo_team or has_any(ctx.description, ("mvp",)),
        ArchitectureChoice(
            pattern="Monolithic (for MVP)",
            reasoning="Simpler deployment, faster iteration, ideal for small team and MVP stage",
        ),
    ),
)
DEFAULT_ARCHITECTURE = ArchitectureChoice(
    pattern="Monolithic",
    reasoning="Simpler architecture, easier to develop and deploy, suitable for initial launch",
)

TIMELINE_BUCKETS: tuple[tuple[int, str], ...] = (
    (2, "1-2 weeks"),
    (4, "3-4 weeks"),
    (8, "6-8 weeks"),
    (12, "2-3 months"),
)


def score_feature(name: str, position: int) -> Feature:
    """Priority, complexity and hours for one explicitly listed feature."""
    complexity = rules.FEATURE_COMPLEXITY_RULES.evaluate(name)
    return Feature(
        name=name,
        priority=rules.PRIORITY_RULES.evaluate(name, position),
        complexity=complexity,
        estimated_hours=rules.estimate_feature_hours(name, complexity),
    )


def derive_features(summary: ProjectSummary) -> list[Feature]:
    features = [
        score_feature(name, index)
        for index, name in enumerate(summary.features)
        if name.strip()
    ]
    for implied in rules.IMPLIED_FEATURES:
        if implied.triggered_by(summary.description) and not implied.covered(
            f.name for f in features
        ):
            features.append(
                Feature(
                    name=implied.name,
                    priority=implied.priority,
                    complexity=implied.complexity,
                    estimated_hours=implied.estimated_hours,
                )
            )
    return features


def recommend_tech_stack(summary: ProjectSummary) -> TechStackRecommendation:
    hints = summary.tech_stack
    backend = BACKEND_HINTS.evaluate(" ".join(hints.backend))
    frontend = FRONTEND_HINTS.evaluate(" ".join(hints.frontend))

    if hints.database:
        database = DatabaseChoice(
            type=hints.database, reasoning=DATABASE_REASONING.evaluate(hints.database)
        )
    else:
        database = DatabaseChoice(
            type=DEFAULT_DATABASE_TYPE, reasoning=DEFAULT_DATABASE_REASONING
        )

    return TechStackRecommendation(backend=backend, frontend=frontend, database=database)


def determine_architecture(summary: ProjectSummary) -> ArchitectureChoice:
    ctx = _ArchitectureContext(
        description=summary.description,
        solo_team=rules.is_solo_team(summary.team_size),
    )
    for predicate, choice in ARCHITECTURE_RULES:
        if predicate(ctx):
            return choice
    return DEFAULT_ARCHITECTURE


def estimate_complexity(summary: ProjectSummary, features: list[Feature]) -> str:
    # Nothing to build means nothing complex, whatever the description says
    if not features:
        return "low"
    score = rules.complexity_score(summary.description, summary.features, summary.timeline)
    return rules.complexity_bucket(score)


def estimate_timeline(summary: ProjectSummary, features: list[Feature]) -> str:
    if summary.timeline and summary.timeline.strip():
        return summary.timeline

    total_hours = sum(f.estimated_hours for f in features)
    team = rules.team_size_number(summary.team_size)
    weeks = math.ceil(total_hours / (team * HOURS_PER_WEEK))

    for limit, label in TIMELINE_BUCKETS:
        if weeks <= limit:
            return label
    return "3+ months"


class LocalResearcher:
    """Keyword-driven research used when no remote credential is configured."""

    def research(self, summary: ProjectSummary) -> ResearchResult:
        logger.info(f"Local research for '{summary.project_name}'")

        features = derive_features(summary)
        result = ResearchResult(
            required_features=features,
            recommended_tech_stack=recommend_tech_stack(summary),
            architecture=determine_architecture(summary),
            estimated_complexity=estimate_complexity(summary, features),
            estimated_timeline=estimate_timeline(summary, features),
        )

        logger.info(
            f"Local research complete: features={len(features)}, "
            f"complexity={result.estimated_complexity}, timeline={result.estimated_timeline}"
        )
        return result

    async def analyze(self, summary: ProjectSummary) -> ResearchResult:
        return self.research(summary)
