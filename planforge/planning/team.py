# planforge/planning/team.py
"""Agent team composition from research output."""

import logging

from planforge.planning.rules import (
    AUTH_KEYWORDS,
    DATA_KEYWORDS,
    REALTIME_KEYWORDS,
    any_feature_matches,
    has_any,
)
from planforge.planning.schemas import (
    AgentDefinition,
    AgentTeam,
    ProjectSummary,
    ResearchResult,
)

logger = logging.getLogger(__name__)

PLANNING = "Planning Agent"
DATABASE = "Database Agent"
BACKEND = "Backend Agent"
FRONTEND = "Frontend Agent"
QA = "QA Agent"
DEVOPS = "DevOps Agent"

EXECUTION_ORDER = (PLANNING, DATABASE, BACKEND, FRONTEND, QA, DEVOPS)

PLANNING_HOURS = {"low": 8, "medium": 12, "high": 20}
FRONTEND_KEYWORDS = ("ui", "frontend", "interface", "display")
BACKEND_EXCLUDED_KEYWORDS = ("ui", "frontend")
BACKEND_HOURS_PER_FEATURE = 8
FRONTEND_HOURS_PER_FEATURE = 6
QA_HOURS_PER_FEATURE = 2
DATA_FEATURE_THRESHOLD = 3


def _planning_agent(research: ResearchResult) -> AgentDefinition:
    return AgentDefinition(
        name=PLANNING,
        role="Project Architect & Coordinator",
        responsibilities=[
            "Create detailed project architecture",
            "Define API contracts and data schemas",
            "Break down features into development tasks",
            "Coordinate between other agents",
            "Review and validate final implementation",
        ],
        skills=["System Architecture", "API Design", "Project Management", "Technical Documentation"],
        workload_percentage=15,
        priority="critical",
        estimated_hours=PLANNING_HOURS[research.estimated_complexity],
    )


def _backend_agent(research: ResearchResult) -> AgentDefinition:
    framework = research.recommended_tech_stack.backend.framework
    names = research.feature_names
    has_auth = any_feature_matches(names, AUTH_KEYWORDS)
    has_realtime = any_feature_matches(names, REALTIME_KEYWORDS)

    backend_hours = sum(
        f.estimated_hours
        for f in research.required_features
        if not has_any(f.name, BACKEND_EXCLUDED_KEYWORDS)
    )

    responsibilities = [
        f"Implement {framework} server",
        "Create RESTful API endpoints",
        "Set up database models and migrations",
        "Implement business logic and services",
    ]
    if has_auth:
        responsibilities.append("Implement authentication & authorization")
    if has_realtime:
        responsibilities.append("Set up WebSocket/real-time communication")

    return AgentDefinition(
        name=BACKEND,
        role="Backend Infrastructure Engineer",
        responsibilities=responsibilities,
        skills=[
            framework,
            research.database_type,
            "API Development",
            "Database Design",
            "Authentication/JWT" if has_auth else "Security Best Practices",
            "WebSocket/SSE" if has_realtime else "HTTP/REST",
        ],
        workload_percentage=40,
        priority="critical",
        estimated_hours=backend_hours or len(names) * BACKEND_HOURS_PER_FEATURE,
    )


def _frontend_agent(research: ResearchResult) -> AgentDefinition:
    framework = research.recommended_tech_stack.frontend.framework
    frontend_hours = sum(
        f.estimated_hours
        for f in research.required_features
        if has_any(f.name, FRONTEND_KEYWORDS)
    )

    return AgentDefinition(
        name=FRONTEND,
        role="UI/UX Implementation Specialist",
        responsibilities=[
            f"Build {framework} application",
            "Create responsive UI components",
            "Implement state management",
            "Integrate with backend API",
            "Ensure accessibility standards (WCAG AA)",
            "Optimize performance and bundle size",
        ],
        skills=[
            framework,
            "TypeScript",
            "CSS/Tailwind",
            "State Management",
            "API Integration",
            "Responsive Design",
        ],
        workload_percentage=35,
        priority="high",
        estimated_hours=frontend_hours
        or len(research.required_features) * FRONTEND_HOURS_PER_FEATURE,
    )


def _database_agent(research: ResearchResult) -> AgentDefinition:
    db_type = research.database_type
    return AgentDefinition(
        name=DATABASE,
        role="Database Architecture Specialist",
        responsibilities=[
            f"Design {db_type} schema",
            "Create database migrations",
            "Optimize queries and indexes",
            "Set up data validation and constraints",
            "Design backup and recovery strategies",
        ],
        skills=[db_type, "Schema Design", "Query Optimization", "Data Modeling", "Migration Management"],
        workload_percentage=15,
        priority="high",
        estimated_hours=16 if research.estimated_complexity == "high" else 12,
    )


def _devops_agent() -> AgentDefinition:
    return AgentDefinition(
        name=DEVOPS,
        role="Infrastructure & Deployment Engineer",
        responsibilities=[
            "Set up CI/CD pipeline",
            "Configure production environment",
            "Implement monitoring and logging",
            "Set up database backups",
            "Create deployment documentation",
        ],
        skills=[
            "Docker/Containerization",
            "CI/CD (GitHub Actions/GitLab)",
            "Cloud Platforms (AWS/Vercel/Railway)",
            "Monitoring (Sentry/DataDog)",
            "Infrastructure as Code",
        ],
        workload_percentage=10,
        priority="medium",
        estimated_hours=12,
    )


def _qa_agent(research: ResearchResult) -> AgentDefinition:
    return AgentDefinition(
        name=QA,
        role="Quality Assurance & Testing Specialist",
        responsibilities=[
            "Write unit tests for backend logic",
            "Create integration tests for API endpoints",
            "Implement frontend component tests",
            "Set up end-to-end testing",
            "Ensure >80% code coverage",
            "Validate accessibility compliance",
        ],
        skills=[
            "Jest/Vitest",
            "React Testing Library",
            "Cypress/Playwright (E2E)",
            "Test-Driven Development",
            "API Testing (Supertest)",
        ],
        workload_percentage=15,
        priority="high",
        estimated_hours=len(research.required_features) * QA_HOURS_PER_FEATURE,
    )


def needs_database_agent(research: ResearchResult) -> bool:
    data_features = [
        f for f in research.required_features if has_any(f.name, DATA_KEYWORDS)
    ]
    return (
        research.estimated_complexity == "high"
        or len(data_features) >= DATA_FEATURE_THRESHOLD
    )


def needs_devops_agent(summary: ProjectSummary, research: ResearchResult) -> bool:
    description = summary.description.lower()
    is_mvp = "mvp" in description or "prototype" in description
    needs_production = (
        "production" in description
        or "deploy" in description
        or research.estimated_complexity == "high"
    )
    return not is_mvp and needs_production


def execution_sequence(agents: list[AgentDefinition]) -> list[str]:
    present = {a.name for a in agents}
    return [name for name in EXECUTION_ORDER if name in present]


def compose(summary: ProjectSummary, research: ResearchResult) -> AgentTeam:
    """Build the agent team; pure function of its inputs."""
    stack = research.recommended_tech_stack
    agents = [_planning_agent(research)]

    if stack.backend is not None:
        agents.append(_backend_agent(research))
    if stack.frontend is not None:
        agents.append(_frontend_agent(research))
    if needs_database_agent(research):
        agents.append(_database_agent(research))
    if needs_devops_agent(summary, research):
        agents.append(_devops_agent())
    agents.append(_qa_agent(research))

    team = AgentTeam.from_agents(agents, execution_sequence(agents))
    logger.info(
        f"Agent team for '{summary.project_name}': {team.total_agents} agents, "
        f"{team.estimated_total_hours:g}h"
    )
    return team
