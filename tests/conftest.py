# tests/conftest.py
"""Shared fixtures: one realistic project carried through every stage."""

from datetime import date

import pytest

from planforge.planning import cost, dependency_risk, team, tools
from planforge.planning.adr import LocalAdrGenerator
from planforge.planning.diagrams import generate_diagrams
from planforge.planning.research import LocalResearcher
from planforge.planning.schemas import (
    ArchitectureChoice,
    DatabaseChoice,
    Feature,
    FrameworkChoice,
    PlanOutput,
    ProjectSummary,
    ResearchResult,
    TechStackRecommendation,
)

TASKAPP_DESCRIPTION = (
    "A task management app where users can create and share tasks with real-time updates"
)


@pytest.fixture
def task_summary():
    return ProjectSummary(
        project_name="TaskApp",
        description=TASKAPP_DESCRIPTION,
        features=["Task creation", "Real-time updates", "Task sharing"],
    )


@pytest.fixture
def task_research(task_summary):
    return LocalResearcher().research(task_summary)


def make_research(
    features: list[Feature] | None = None,
    complexity: str = "medium",
    database: str = "PostgreSQL",
) -> ResearchResult:
    """Hand-built research result for derivation tests."""
    return ResearchResult(
        required_features=features or [],
        recommended_tech_stack=TechStackRecommendation(
            backend=FrameworkChoice(framework="Express.js with TypeScript"),
            frontend=FrameworkChoice(framework="Next.js 14 with App Router"),
            database=DatabaseChoice(type=database),
        ),
        architecture=ArchitectureChoice(pattern="Monolithic", reasoning="Single deployable"),
        estimated_complexity=complexity,
        estimated_timeline="3-4 weeks",
    )


@pytest.fixture
def research_factory():
    return make_research


@pytest.fixture
def task_plan(task_summary, task_research):
    agent_team = team.compose(task_summary, task_research)
    recommendations = tools.recommend(task_summary, task_research)
    return PlanOutput(
        summary=task_summary,
        research=task_research,
        team=agent_team,
        tools=recommendations,
        adrs=LocalAdrGenerator().generate(task_summary, task_research, today=date(2026, 1, 15)),
        diagrams=generate_diagrams(task_summary, task_research),
        cost=cost.estimate(task_summary, task_research, agent_team),
        risks=dependency_risk.analyze(recommendations),
    )
