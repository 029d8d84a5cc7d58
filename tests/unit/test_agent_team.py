# tests/unit/test_agent_team.py
"""Unit tests for agent team composition."""

from planforge.planning import team
from planforge.planning.schemas import Feature, ProjectSummary


def _feature(name, complexity="medium", hours=8):
    return Feature(name=name, priority="medium", complexity=complexity, estimated_hours=hours)


class TestTaskAppTeam:
    def test_agents_and_sequence(self, task_summary, task_research):
        result = team.compose(task_summary, task_research)
        assert result.recommended_sequence == [
            "Planning Agent",
            "Backend Agent",
            "Frontend Agent",
            "QA Agent",
        ]
        assert result.total_agents == 4

    def test_totals_consistent(self, task_summary, task_research):
        result = team.compose(task_summary, task_research)
        assert result.estimated_total_hours == sum(a.estimated_hours for a in result.agents)
        # planning 12 + backend 72 + frontend fallback 24 + qa 8
        assert result.estimated_total_hours == 116

    def test_backend_covers_auth_and_realtime(self, task_summary, task_research):
        backend = team.compose(task_summary, task_research).get("Backend Agent")
        assert "Implement authentication & authorization" in backend.responsibilities
        assert "Set up WebSocket/real-time communication" in backend.responsibilities
        assert "Authentication/JWT" in backend.skills


class TestOptionalAgents:
    def test_low_complexity_without_data_features_has_no_database_agent(self, research_factory):
        research = research_factory([_feature("Landing page")], complexity="low")
        summary = ProjectSummary(project_name="Site", description="Marketing site")
        result = team.compose(summary, research)
        assert result.get("Database Agent") is None
        assert result.get("Planning Agent").estimated_hours == 8

    def test_three_data_features_add_database_agent(self, research_factory):
        features = [_feature("Data import"), _feature("CRUD records"), _feature("File storage")]
        research = research_factory(features, complexity="low")
        summary = ProjectSummary(project_name="Records")
        database = team.compose(summary, research).get("Database Agent")
        assert database is not None
        assert database.estimated_hours == 12

    def test_high_complexity_adds_database_and_devops(self, research_factory):
        research = research_factory([_feature("Payments", "high", 24)], complexity="high")
        summary = ProjectSummary(project_name="Shop", description="Online shop")
        result = team.compose(summary, research)
        assert result.get("Database Agent").estimated_hours == 16
        assert result.recommended_sequence[-1] == "DevOps Agent"

    def test_mvp_skips_devops(self, research_factory):
        research = research_factory([_feature("Payments", "high", 24)], complexity="high")
        summary = ProjectSummary(project_name="Shop", description="MVP for a production shop")
        assert team.compose(summary, research).get("DevOps Agent") is None

    def test_deploy_mention_adds_devops(self, research_factory):
        research = research_factory([_feature("Reports")], complexity="medium")
        summary = ProjectSummary(project_name="Ops", description="Deploy to customers")
        assert team.compose(summary, research).get("DevOps Agent") is not None


class TestHours:
    def test_frontend_hours_from_ui_features(self, research_factory):
        features = [_feature("Settings UI", hours=10), _feature("Sync engine", hours=20)]
        result = team.compose(ProjectSummary(project_name="Split"), research_factory(features))
        assert result.get("Frontend Agent").estimated_hours == 10
        assert result.get("Backend Agent").estimated_hours == 20
        assert result.get("QA Agent").estimated_hours == 4
