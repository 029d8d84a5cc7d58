# tests/unit/test_diagrams.py
"""Unit tests for Mermaid diagram generation."""

from planforge.planning import diagrams
from planforge.planning.schemas import Feature, InputEnrichment, Persona, ProjectSummary


def _plain_research(research_factory):
    return research_factory(
        [Feature(name="Landing page", priority="high", complexity="low", estimated_hours=8)],
        complexity="low",
    )


class TestSystemContext:
    def test_default_persona(self, task_summary, task_research):
        source = diagrams.system_context(task_summary, task_research)
        assert source.startswith("C4Context")
        assert 'Person(user, "User", "End User")' in source
        assert "System_Ext(email" in source
        assert "payment" not in source

    def test_enrichment_persona(self, task_summary, task_research):
        enrichment = InputEnrichment(personas=[Persona(name="Team Lead", role="Assigns work")])
        source = diagrams.system_context(task_summary, task_research, enrichment)
        assert 'Person(user, "Team Lead", "Assigns work")' in source

    def test_quotes_are_escaped(self, task_research):
        summary = ProjectSummary(project_name='The "Best" App', description="Line one\nline two")
        source = diagrams.system_context(summary, task_research)
        assert "The 'Best' App" in source
        assert "Line one line two" in source

    def test_payment_and_storage_externals(self, research_factory):
        research = research_factory(
            [
                Feature(name="Payment checkout", priority="high", complexity="high", estimated_hours=24),
                Feature(name="File upload", priority="medium", complexity="medium", estimated_hours=16),
            ]
        )
        source = diagrams.system_context(ProjectSummary(project_name="Store"), research)
        assert "System_Ext(payment" in source
        assert "System_Ext(storage" in source
        assert 'Rel(app, storage, "Stores files", "S3 API")' in source


class TestContainer:
    def test_realtime_and_auth_containers(self, task_summary, task_research):
        source = diagrams.container(task_summary, task_research)
        assert 'Container(ws, "WebSocket Server"' in source
        assert 'ContainerDb(cache, "Cache", "Redis"' in source
        assert 'Container(auth, "Auth Service"' in source
        assert '"Express.js with TypeScript"' in source

    def test_plain_project(self, research_factory):
        source = diagrams.container(ProjectSummary(project_name="Site"), _plain_research(research_factory))
        assert "WebSocket Server" not in source
        assert "Redis" not in source
        assert "Auth Service" not in source


class TestEntityRelationship:
    def test_user_and_task_entities(self, task_summary, task_research):
        source = diagrams.entity_relationship(task_summary, task_research)
        assert source.startswith("erDiagram")
        assert "  User {" in source
        assert "  Task {" in source
        assert "User ||--o{ Task : creates" in source

    def test_fallback_entities(self, research_factory):
        summary = ProjectSummary(project_name="Site", description="Marketing site", features=["Landing page"])
        source = diagrams.entity_relationship(summary, _plain_research(research_factory))
        assert "  User {" in source
        assert "  Item {" in source
        assert "User ||--o{ Item : owns" in source

    def test_domain_without_user(self, research_factory):
        summary = ProjectSummary(project_name="Catalog", features=["Product catalog"])
        research = research_factory(
            [Feature(name="Product catalog", priority="high", complexity="medium", estimated_hours=16)]
        )
        source = diagrams.entity_relationship(summary, research)
        assert "  Product {" in source
        assert "User {" not in source
        assert "||--o{" not in source


class TestFlows:
    def test_auth_and_crud_flows(self, task_research):
        titles = [f.title for f in diagrams.sequence_flows(task_research)]
        assert titles == ["Authentication Flow", "Create Item Flow"]

    def test_crud_flow_only(self, research_factory):
        flows = diagrams.sequence_flows(_plain_research(research_factory))
        assert [f.title for f in flows] == ["Create Item Flow"]
        assert flows[0].source.startswith("sequenceDiagram")

    def test_generate_diagrams(self, task_summary, task_research):
        result = diagrams.generate_diagrams(task_summary, task_research)
        assert result.system_context.startswith("C4Context")
        assert result.container.startswith("C4Container")
        assert len(result.sequences) == 2
