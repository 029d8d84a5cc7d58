# tests/unit/test_local_researcher.py
"""Unit tests for the local heuristic researcher."""

import pytest

from planforge.planning.research import LocalResearcher
from planforge.planning.research.local import (
    derive_features,
    determine_architecture,
    recommend_tech_stack,
)
from planforge.planning.schemas import ProjectSummary, TechStackHints


class TestTaskAppScenario:
    def test_explicit_features_scored(self, task_research):
        by_name = {f.name: f for f in task_research.required_features}
        assert by_name["Task creation"].priority == "high"
        assert by_name["Task creation"].estimated_hours == 16
        assert by_name["Real-time updates"].priority == "high"
        assert by_name["Real-time updates"].complexity == "high"
        assert by_name["Task sharing"].priority == "medium"

    def test_implied_auth_feature(self, task_research):
        auth = next(
            f for f in task_research.required_features
            if f.name == "User Authentication & Authorization"
        )
        assert auth.priority == "critical"
        assert auth.complexity == "medium"
        assert auth.estimated_hours == 16

    def test_complexity_at_least_medium(self, task_research):
        assert task_research.estimated_complexity in ("medium", "high")

    def test_defaults_for_stack_and_architecture(self, task_research):
        stack = task_research.recommended_tech_stack
        assert stack.backend.framework == "Express.js with TypeScript"
        assert stack.frontend.framework == "Next.js 14 with App Router"
        assert stack.database.type == "PostgreSQL"
        assert task_research.architecture.pattern == "Monolithic"

    def test_timeline_from_hours(self, task_research):
        # 72 hours for one developer is two weeks
        assert task_research.estimated_timeline == "1-2 weeks"


class TestEdgeCases:
    def test_zero_features_is_low_complexity(self):
        summary = ProjectSummary(project_name="Bare", description="real-time ai payment system")
        result = LocalResearcher().research(summary)
        assert result.required_features == []
        assert result.estimated_complexity == "low"
        assert result.estimated_timeline == "1-2 weeks"

    def test_empty_description(self):
        summary = ProjectSummary(project_name="Quiet", features=["Landing page"])
        result = LocalResearcher().research(summary)
        assert [f.name for f in result.required_features] == ["Landing page"]

    def test_blank_features_ignored(self):
        summary = ProjectSummary(project_name="Blank", features=["  ", "Reports"])
        assert [f.name for f in derive_features(summary)] == ["Reports"]

    def test_stated_timeline_kept(self):
        summary = ProjectSummary(project_name="Dated", features=["Reports"], timeline="6 weeks")
        assert LocalResearcher().research(summary).estimated_timeline == "6 weeks"

    def test_implied_feature_not_duplicated(self):
        summary = ProjectSummary(
            project_name="Covered", description="users log in", features=["OAuth login"]
        )
        names = [f.name for f in derive_features(summary)]
        assert "User Authentication & Authorization" not in names


class TestStackHints:
    def test_preferences_respected(self):
        summary = ProjectSummary(
            project_name="Hinted",
            tech_stack=TechStackHints(backend=["Python"], frontend=["Vue"], database="MongoDB"),
        )
        stack = recommend_tech_stack(summary)
        assert stack.backend.framework == "FastAPI with Python"
        assert stack.frontend.framework == "Vue 3 with Composition API"
        assert stack.database.type == "MongoDB"
        assert "MongoDB" in stack.database.reasoning

    def test_go_hint(self):
        summary = ProjectSummary(project_name="Fast", tech_stack=TechStackHints(backend=["Go"]))
        assert recommend_tech_stack(summary).backend.framework == "Go with Gin/Echo"


class TestArchitecture:
    @pytest.mark.parametrize(
        "description,team_size,expected",
        [
            ("A distributed microservices platform", None, "Microservices"),
            ("Runs on AWS Lambda", None, "Serverless"),
            ("Quick MVP", None, "Monolithic (for MVP)"),
            ("Internal tool", "solo", "Monolithic (for MVP)"),
            ("Internal tool", "4", "Monolithic"),
        ],
    )
    def test_rules(self, description, team_size, expected):
        summary = ProjectSummary(project_name="Arch", description=description, team_size=team_size)
        assert determine_architecture(summary).pattern == expected


class TestAsyncInterface:
    @pytest.mark.asyncio
    async def test_analyze_matches_research(self, task_summary):
        researcher = LocalResearcher()
        assert await researcher.analyze(task_summary) == researcher.research(task_summary)


class TestSoloTaskManager:
    @pytest.fixture
    def research(self):
        summary = ProjectSummary.model_validate(
            {
                "projectName": "TaskApp",
                "description": "A tool for teams to manage tasks with user login",
                "features": ["Task CRUD", "Real-time updates"],
                "teamSize": "1",
            }
        )
        return LocalResearcher().research(summary)

    def test_auth_implied(self, research):
        auth = next(
            f for f in research.required_features
            if f.name == "User Authentication & Authorization"
        )
        assert (auth.priority, auth.complexity, auth.estimated_hours) == ("critical", "medium", 16)

    def test_real_time_is_high_complexity(self, research):
        realtime = next(f for f in research.required_features if f.name == "Real-time updates")
        assert realtime.complexity == "high"

    def test_complexity_and_architecture(self, research):
        assert research.estimated_complexity == "medium"
        assert research.architecture.pattern == "Monolithic (for MVP)"


class TestZeroFeaturesWithTriggers:
    @pytest.mark.parametrize(
        "description,implied",
        [
            ("Lets people login", "User Authentication & Authorization"),
            ("A place to save data", "Data Persistence Layer"),
            ("A backend service", "RESTful API Endpoints"),
        ],
    )
    def test_implied_feature_added(self, description, implied):
        summary = ProjectSummary(project_name="Sparse", description=description, features=[])
        result = LocalResearcher().research(summary)
        assert [f.name for f in result.required_features] == [implied]
        assert result.estimated_complexity in ("low", "medium", "high")


class TestComplexityMonotonic:
    BUCKET_RANK = {"low": 0, "medium": 1, "high": 2}

    @pytest.mark.parametrize("description", ["An internal tool", "A real-time tool"])
    def test_more_features_never_lower_bucket(self, description):
        ranks = []
        for count in (1, 5, 6, 8, 10, 11, 15):
            summary = ProjectSummary(
                project_name="Grow",
                description=description,
                features=[f"Screen {i}" for i in range(count)],
            )
            bucket = LocalResearcher().research(summary).estimated_complexity
            ranks.append(self.BUCKET_RANK[bucket])
        assert ranks == sorted(ranks)
        assert ranks[-1] > ranks[0]
