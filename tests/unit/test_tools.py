# tests/unit/test_tools.py
"""Unit tests for tool, package and service recommendations."""

from planforge.planning import tools
from planforge.planning.schemas import (
    DatabaseChoice,
    Feature,
    FrameworkChoice,
    TechStackRecommendation,
)


def _names(recommendations):
    return [r.name for r in recommendations]


class TestTaskAppRecommendations:
    def test_mcp_servers(self, task_research):
        assert _names(tools.recommend_mcp_servers(task_research)) == [
            "Filesystem MCP Server",
            "Git MCP Server",
            "PostgreSQL MCP Server",
            "Fetch MCP Server",
        ]

    def test_packages_follow_stack(self, task_research):
        names = _names(tools.recommend_packages(task_research))
        assert names[:2] == ["Express.js", "Express Middleware"]
        assert "TypeScript" in names
        assert "Prisma ORM" in names
        assert "Authentication Libraries" in names
        assert "Next.js" in names
        assert names[-3:] == ["Tailwind CSS", "Zod", "Testing Libraries"]

    def test_services_for_medium_complexity(self, task_research):
        assert _names(tools.recommend_services(task_research)) == [
            "Vercel",
            "Supabase / Neon",
            "Vercel Analytics / Plausible",
        ]

    def test_total_is_sum_of_categories(self, task_summary, task_research):
        result = tools.recommend(task_summary, task_research)
        assert result.total_recommendations == (
            len(result.mcp_servers)
            + len(result.npm_packages)
            + len(result.dev_tools)
            + len(result.services)
        )
        assert result.total_recommendations == 20

    def test_package_entries_unique(self, task_summary, task_research):
        entries = tools.recommend(task_summary, task_research).package_entries()
        packages = [p for p, _ in entries]
        assert len(packages) == len(set(packages))
        assert ("express", "backend") in entries
        assert ("next", "frontend") in entries


class TestStackVariants:
    def test_python_vue_mongo(self, research_factory):
        research = research_factory(
            [Feature(name="Reports", priority="low", complexity="high", estimated_hours=8)],
            complexity="high",
            database="MongoDB",
        ).model_copy(
            update={
                "recommended_tech_stack": TechStackRecommendation(
                    backend=FrameworkChoice(framework="FastAPI with Python"),
                    frontend=FrameworkChoice(framework="Vue 3 with Composition API"),
                    database=DatabaseChoice(type="MongoDB"),
                )
            }
        )
        packages = _names(tools.recommend_packages(research))
        assert "FastAPI" in packages
        assert "Vue 3" in packages
        assert "TypeScript" not in packages
        assert "Prisma ORM" not in packages

        services = _names(tools.recommend_services(research))
        assert services == ["Sentry", "Vercel Analytics / Plausible"]

        servers = _names(tools.recommend_mcp_servers(research))
        assert "PostgreSQL MCP Server" not in servers

    def test_pure_function(self, task_summary, task_research):
        assert tools.recommend(task_summary, task_research) == tools.recommend(
            task_summary, task_research
        )

    def test_sqlite_server(self, research_factory):
        servers = _names(tools.recommend_mcp_servers(research_factory(database="SQLite")))
        assert "SQLite MCP Server" in servers
