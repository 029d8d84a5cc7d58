# planforge/planning/pipeline/output.py
"""
Build spec renderer for converting a PlanOutput to markdown and YAML.

The markdown document has eighteen numbered sections (``## N. Title``) that
the quality validator scores. The companion decisions file records the
stack, architecture and ADR outcomes in YAML.
"""

import re
from typing import Any

import yaml

from planforge.planning.rules import has_any
from planforge.planning.schemas import ADR, Feature, PlanOutput, ToolRecommendation

SECTION_TITLES = (
    "Executive Summary",
    "Non-Negotiables",
    "Target Users & Personas",
    "Technology Stack",
    "Architecture Decision Records",
    "Agent Team & Execution Sequence",
    "Functional Requirements",
    "Non-Functional Requirements",
    "Recommended Tools & Services",
    "System Architecture",
    "Data Model",
    "Key Flows",
    "Cost Estimation",
    "Dependency Risk Analysis",
    "Testing Strategy",
    "Deployment Guide",
    "Clarifications & Assumptions",
    "Success Criteria",
)

NONE_STATED = "None stated"
DEFAULT_PAGE_LOAD_MS = 2000
DEFAULT_API_RESPONSE_MS = 500
DEFAULT_WCAG = "AA"

RISK_BADGES = {"critical": "CRITICAL", "high": "HIGH", "medium": "MEDIUM", "low": "LOW"}

ENVIRONMENT_VARIABLES = (
    "DATABASE_URL",
    "JWT_SECRET",
    "API_URL",
    "FRONTEND_URL",
    "NODE_ENV=production",
)
BUILD_COMMANDS = ("npm run build", "npx prisma migrate deploy", "npm start")
DEPLOYMENT_STEPS = (
    "Provision the production database and record its connection string",
    "Configure environment variables in the hosting dashboard or secret store",
    "Run database migrations against the production database",
    "Build the frontend and backend artifacts",
    "Deploy both artifacts to the hosting platform",
    "Verify the deployment with health checks and a smoke test of the key flows",
)

AGENT_TASKS = {
    "Planning Agent": [
        "Review and validate project requirements",
        "Create the system architecture diagram",
        "Define API contracts and data schemas",
        "Set up the project structure and boilerplate",
        "Create the task breakdown for the other agents",
    ],
    "Database Agent": [
        "Design the complete database schema",
        "Create the ORM schema file",
        "Generate and run migrations",
        "Add indexes for the hot query paths",
        "Set up seed data for development",
    ],
    "QA Agent": [
        "Write unit tests for all services",
        "Create integration tests for API endpoints",
        "Implement E2E tests for critical flows",
        "Set up the CI testing pipeline",
        "Verify >80% code coverage",
    ],
    "DevOps Agent": [
        "Set up GitHub Actions CI/CD",
        "Configure deployment to the selected hosting platform",
        "Set up environment variables",
        "Configure database backups",
        "Add monitoring and logging",
    ],
}

AGENT_DELIVERABLES = {
    "Planning Agent": [
        "Architecture diagram",
        "API specification document",
        "Database schema design",
        "Project setup with boilerplate",
    ],
    "Backend Agent": [
        "Working API server",
        "All API endpoints implemented",
        "Database models and services",
        "API documentation",
    ],
    "Frontend Agent": [
        "Frontend application",
        "All UI components",
        "Responsive layouts",
        "API integration layer",
    ],
    "Database Agent": ["ORM schema", "Database migrations", "Seed data scripts"],
    "QA Agent": ["Test suite with >80% coverage", "CI test integration", "Test documentation"],
    "DevOps Agent": [
        "CI/CD pipeline",
        "Deployment configuration",
        "Monitoring setup",
        "Deployment documentation",
    ],
}

_UI_KEYWORDS = ("ui", "interface", "display")
_API_KEYWORDS = ("api", "crud", "auth")
_REALTIME_KEYWORDS = ("real-time", "realtime", "websocket")


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated file-system-safe name."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "plan"


def _bullets(items: list[str]) -> list[str]:
    return [f"- {item}" for item in items]


def _numbered(items: list[str]) -> list[str]:
    return [f"{i}. {item}" for i, item in enumerate(items, start=1)]


def _checklist(items: list[str]) -> list[str]:
    return [f"- [ ] {item}" for item in items]


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def _hours(hours: float) -> str:
    return f"{hours:g}h"


def feature_tasks(feature: Feature) -> list[str]:
    name = feature.name
    tasks = [f"Define the data schema for {name}", "Create database migrations"]
    if has_any(name, _API_KEYWORDS):
        tasks += [
            f"Implement backend API routes for {name}",
            "Add request validation and error handling",
            "Write unit tests for the business logic",
        ]
    if has_any(name, ("auth",)):
        tasks += [
            "Set up JWT token generation and validation",
            "Implement password hashing with bcrypt",
            "Create authentication middleware",
        ]
    if has_any(name, _UI_KEYWORDS):
        tasks += [
            f"Create UI components for {name}",
            "Implement state management",
            "Add form validation and error messages",
            "Style components with Tailwind CSS",
        ]
    if has_any(name, _REALTIME_KEYWORDS):
        tasks += [
            "Set up the WebSocket server",
            "Implement the client-side WebSocket connection",
            "Add reconnection logic",
        ]
    tasks += [
        f"Write integration tests for {name}",
        "Test edge cases and error scenarios",
        f"Document the {name} API endpoints",
        "Add usage examples",
    ]
    return tasks


def feature_files(feature: Feature) -> list[str]:
    slug = slugify(feature.name)
    files = [
        f"backend/src/routes/{slug}.ts",
        f"backend/src/services/{slug}-service.ts",
        f"backend/src/models/{slug}.ts",
        f"backend/tests/{slug}.test.ts",
    ]
    if has_any(feature.name, ("ui", "interface")):
        files += [f"frontend/app/{slug}/page.tsx", f"frontend/components/{slug}/Component.tsx"]
    files.append(f"shared/types/{slug}.ts")
    return files


def feature_dependencies(feature: Feature) -> list[str]:
    deps = []
    if has_any(feature.name, ("auth",)):
        deps += ["Database schema must be defined", "User model must exist"]
    if has_any(feature.name, _REALTIME_KEYWORDS):
        deps += ["WebSocket server infrastructure", "Authentication system for secure connections"]
    return deps


def acceptance_criteria(feature: Feature) -> list[str]:
    criteria = [
        f"{feature.name} behaves as described in this section",
        "All tests passing with >80% coverage",
        "Error paths return documented status codes and messages",
        "API responses match the published contract",
    ]
    if has_any(feature.name, ("ui", "interface")):
        criteria += ["UI is responsive on mobile and desktop", "Accessibility standards met (WCAG AA)"]
    if has_any(feature.name, ("auth",)):
        criteria += [
            "Passwords are hashed and never stored in plain text",
            "JWT tokens expire after 24 hours",
            "Invalid credentials return a 401 response",
        ]
    return criteria


class BuildSpecRenderer:
    """
    Converts PlanOutput to the build specification markdown and decisions YAML.

    Format:
        # {project} - Complete Build Specification

        ## 1. Executive Summary
        ...
        ## 18. Success Criteria
    """

    def render(self, plan: PlanOutput) -> str:
        """
        Render PlanOutput to a markdown string.

        Args:
            plan: PlanOutput with every stage output

        Returns:
            Markdown with eighteen numbered sections
        """
        builders = (
            self._executive_summary,
            self._non_negotiables,
            self._personas,
            self._technology_stack,
            self._adrs,
            self._agent_team,
            self._functional_requirements,
            self._non_functional_requirements,
            self._tools,
            self._system_architecture,
            self._data_model,
            self._key_flows,
            self._cost,
            self._risks,
            self._testing,
            self._deployment,
            self._clarifications,
            self._success_criteria,
        )

        lines = [
            f"# {plan.summary.project_name} - Complete Build Specification",
            "",
            f"**Generated:** {plan.generated_at.isoformat()}",
            f"**Estimated Timeline:** {plan.research.estimated_timeline}",
            f"**Total Hours:** {_hours(plan.team.estimated_total_hours)}",
            f"**Complexity:** {plan.research.estimated_complexity}",
            f"**Research Mode:** {plan.research_mode} | **ADR Mode:** {plan.adr_mode}",
            "",
            "---",
            "",
        ]
        for number, (title, builder) in enumerate(zip(SECTION_TITLES, builders), start=1):
            lines.append(f"## {number}. {title}")
            lines.append("")
            lines.extend(builder(plan))
            lines.append("")
        lines += ["---", "", "**END OF BUILD SPECIFICATION**", ""]
        return "\n".join(lines)

    def render_decisions(self, plan: PlanOutput) -> str:
        """Render the decisions file as YAML."""
        stack = plan.research.recommended_tech_stack
        data: dict[str, Any] = {
            "project": plan.summary.project_name,
            "generated_at": plan.generated_at.isoformat(),
            "modes": {"research": plan.research_mode, "adrs": plan.adr_mode},
            "complexity": plan.research.estimated_complexity,
            "timeline": plan.research.estimated_timeline,
            "stack": {
                "backend": stack.backend.framework if stack.backend else None,
                "frontend": stack.frontend.framework if stack.frontend else None,
                "database": plan.research.database_type,
            },
            "architecture": plan.research.architecture.pattern,
            "decisions": [
                {
                    "id": adr.id,
                    "title": adr.title,
                    "status": adr.status,
                    "decision": adr.decision,
                    "alternatives": [alt.name for alt in adr.alternatives],
                    "date": adr.date_created.isoformat(),
                }
                for adr in plan.adrs
            ],
            "agents": plan.team.recommended_sequence,
            "cost": {
                "monthly": plan.cost.total_monthly,
                "annual": plan.cost.total_annual,
                "confidence": plan.cost.confidence,
            },
            "risks": [
                {"package": r.package_name, "level": r.risk_level, "category": r.category}
                for r in plan.risks
            ],
        }
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    # -- sections --------------------------------------------------------

    def _executive_summary(self, plan: PlanOutput) -> list[str]:
        s, r, team = plan.summary, plan.research, plan.team
        stack = r.recommended_tech_stack
        critical = [f.name for f in r.required_features if f.priority == "critical"]
        lines = [
            s.description or f"{s.project_name} is delivered as a {r.architecture.pattern} application.",
            "",
            f"{s.project_name} is planned as a {r.estimated_complexity}-complexity project with "
            f"{len(r.required_features)} required features, delivered by a team of "
            f"{team.total_agents} agents over an estimated {r.estimated_timeline}. The total "
            f"effort is {_hours(team.estimated_total_hours)} of engineering work. The "
            f"architecture follows the {r.architecture.pattern} pattern on a "
            f"{stack.backend.framework if stack.backend else 'serverless'} backend, a "
            f"{stack.frontend.framework if stack.frontend else 'static'} frontend and a "
            f"{r.database_type} database.",
            "",
            "| Attribute | Value |",
            "|-----------|-------|",
            f"| Project | {s.project_name} |",
            f"| Complexity | {r.estimated_complexity} |",
            f"| Timeline | {r.estimated_timeline} |",
            f"| Team size | {s.team_size or NONE_STATED} |",
            f"| Features | {len(r.required_features)} |",
            f"| Agents | {team.total_agents} |",
            f"| Monthly infrastructure | {_money(plan.cost.total_monthly)} |",
            f"| Architecture decisions | {len(plan.adrs)} |",
            "",
            "**Critical features:**",
            "",
            *_bullets(critical or [f.name for f in r.required_features[:3]] or [NONE_STATED]),
            "",
            "This document is the single source of truth for the build. Each section below "
            "refers to the same technology stack, architecture pattern and feature list, so "
            "an implementer can work through the sections in order without reconciling "
            "conflicting instructions. Sections 5, 10 and 11 record the architectural "
            "reasoning; sections 6 and 7 break the work into agent tasks and feature "
            "deliverables; sections 13 and 14 cover cost and dependency risk; sections 15, "
            "16 and 18 define how the result is verified, shipped and accepted.",
        ]
        return lines

    def _non_negotiables(self, plan: PlanOutput) -> list[str]:
        s, e = plan.summary, plan.enrichment
        items = list(s.constraints)
        if e is not None:
            if e.nfr_security and e.nfr_security.compliance_standards:
                items.append(
                    "Compliance with " + ", ".join(e.nfr_security.compliance_standards)
                )
            if e.nfr_security and e.nfr_security.encryption_at_rest:
                items.append("Encryption at rest for all stored user data")
            if e.nfr_accessibility and e.nfr_accessibility.wcag_level:
                items.append(f"WCAG {e.nfr_accessibility.wcag_level} accessibility conformance")
            if e.architecture_style and e.architecture_style != "auto":
                items.append(f"Architecture style: {e.architecture_style}")
            if e.budget_constraint:
                items.append(f"Infrastructure budget tier: {e.budget_constraint}")
        if s.timeline:
            items.append(f"Delivery timeline: {s.timeline}")

        lines = [
            "The following constraints are fixed for this build. Any change to them requires "
            "a new architecture decision record and a revision of this document.",
            "",
            "### Project constraints",
            "",
            *_bullets(items or ["No project-specific constraints were supplied"]),
            "",
            "### Engineering baseline",
            "",
            *_bullets(
                [
                    "All secrets live in environment variables; none are committed to the repository",
                    "Every API endpoint validates its input and returns structured error responses",
                    "Passwords are hashed with bcrypt or argon2 and never logged",
                    "All traffic is served over HTTPS in every deployed environment",
                    "Every feature ships with unit and integration tests before it is merged",
                    "Database schema changes go through versioned migrations only",
                    "The main branch stays deployable; CI must pass before merge",
                    "Dependencies are pinned and audited with npm audit on every build",
                ]
            ),
            "",
            "These rules apply to every agent listed in section 6 and to every feature listed "
            "in section 7. Reviewers reject changes that violate them regardless of the "
            "schedule pressure on the current milestone. The baseline exists to keep the "
            "security, data integrity and release process of the project predictable from "
            "the first commit to the production launch.",
        ]
        return lines

    def _personas(self, plan: PlanOutput) -> list[str]:
        e = plan.enrichment
        personas = e.personas if e else []
        lines = []
        if personas:
            lines.append(
                f"{len(personas)} persona(s) were defined for {plan.summary.project_name}. "
                "Each one drives acceptance criteria and the flows in section 12."
            )
            lines.append("")
            for persona in personas:
                lines.append(f"### {persona.name}")
                lines.append("")
                lines.append(f"**Role:** {persona.role or 'End User'}")
                lines.append("")
                if persona.goals:
                    lines.append("**Goals:**")
                    lines.extend(_bullets(persona.goals))
                    lines.append("")
        else:
            lines += [
                "No personas were supplied with the project input. The plan assumes one "
                "primary persona until the product owner defines the audience in detail.",
                "",
                "### Primary User",
                "",
                "**Role:** End User",
                "",
                "**Goals:**",
                *_bullets(
                    [
                        f"Use the core features of {plan.summary.project_name} without training",
                        "Complete the primary task in under two minutes",
                        "Trust that personal data is stored securely",
                    ]
                ),
                "",
            ]
        lines += [
            "### Design implications",
            "",
            *_bullets(
                [
                    "Primary flows are reachable within two clicks from the landing page",
                    "Error messages name the failed action and the next step for the user",
                    "Forms preserve entered data when validation fails",
                    "Every interactive element is reachable with the keyboard",
                ]
            ),
            "",
            "Personas are referenced when prioritizing features in section 7 and when "
            "writing end-to-end tests in section 15. When a requirement conflicts between "
            "personas, the persona listed first takes precedence until the product owner "
            "records a different ranking in the clarifications of section 17.",
        ]
        return lines

    def _technology_stack(self, plan: PlanOutput) -> list[str]:
        r = plan.research
        stack = r.recommended_tech_stack
        rows = []
        if stack.backend:
            rows.append(("Backend", stack.backend.framework, stack.backend.reasoning))
        if stack.frontend:
            rows.append(("Frontend", stack.frontend.framework, stack.frontend.reasoning))
        rows.append(
            ("Database", r.database_type, stack.database.reasoning if stack.database else "")
        )
        rows.append(("Architecture", r.architecture.pattern, r.architecture.reasoning))

        required = [t for t in plan.tools.npm_packages if t.priority == "required"]
        lines = [
            "| Layer | Choice | Reasoning |",
            "|-------|--------|-----------|",
            *[f"| {layer} | {choice} | {reason or NONE_STATED} |" for layer, choice, reason in rows],
            "",
            "### Prerequisites",
            "",
            *_bullets(
                [
                    "Node.js 20+ and npm 9+",
                    "Git",
                    f"{r.database_type} database (local instance or container)",
                    "Code editor with TypeScript support",
                ]
            ),
            "",
            "### Environment setup",
            "",
            *_numbered(
                [
                    "Clone the repository",
                    "Copy .env.example to .env",
                    "Configure the database connection string",
                    "Set the API keys listed in section 16",
                ]
            ),
            "",
            "### Install dependencies",
            "",
            "```bash",
            *[t.installation for t in required],
            "```",
            "",
            "### Project structure",
            "",
            "```",
            self._file_structure(plan),
            "```",
        ]
        return lines

    def _file_structure(self, plan: PlanOutput) -> str:
        stack = plan.research.recommended_tech_stack
        root = "monorepo" if "monolith" in plan.research.architecture.pattern.lower() else "services"
        lines = [f"{root}/"]
        if stack.backend:
            lines += [
                "├── backend/",
                "│   ├── src/",
                "│   │   ├── index.ts",
                "│   │   ├── routes/",
                "│   │   ├── services/",
                "│   │   ├── models/",
                "│   │   └── utils/",
                "│   ├── prisma/",
                "│   │   └── schema.prisma",
                "│   ├── tests/",
                "│   └── package.json",
            ]
        if stack.frontend:
            lines += [
                "├── frontend/",
                "│   ├── app/",
                "│   │   ├── layout.tsx",
                "│   │   ├── page.tsx",
                "│   │   └── globals.css",
                "│   ├── components/",
                "│   ├── lib/",
                "│   ├── tests/",
                "│   └── package.json",
            ]
        lines += ["├── shared/", "│   └── types/", "├── docs/", "├── .gitignore", "└── README.md"]
        return "\n".join(lines)

    def _adr_block(self, adr: ADR) -> list[str]:
        lines = [
            f"### ADR {adr.id}: {adr.title}",
            "",
            f"**Status:** {adr.status} | **Date:** {adr.date_created.isoformat()}",
            "",
            "**Context:**",
            "",
            adr.context,
            "",
            "**Decision:**",
            "",
            adr.decision,
            "",
            "**Consequences:**",
            "",
            *_bullets(adr.consequences),
            "",
            "**Alternatives Considered:**",
            "",
        ]
        for alt in adr.alternatives:
            lines.append(f"- **{alt.name}**")
            if alt.pros:
                lines.append(f"  - Pros: {', '.join(alt.pros)}")
            if alt.cons:
                lines.append(f"  - Cons: {', '.join(alt.cons)}")
        lines.append("")
        return lines

    def _adrs(self, plan: PlanOutput) -> list[str]:
        lines = [
            f"{len(plan.adrs)} architecture decisions were recorded "
            f"({plan.adr_mode} generation). Each record states the context, the decision, "
            "its consequences and the alternatives that were rejected.",
            "",
        ]
        for adr in plan.adrs:
            lines.extend(self._adr_block(adr))
        return lines

    def _agent_tasks(self, agent_name: str, plan: PlanOutput) -> list[str]:
        stack = plan.research.recommended_tech_stack
        features = plan.research.required_features
        if agent_name == "Backend Agent":
            framework = stack.backend.framework if stack.backend else "the API server"
            return [
                f"Set up {framework}",
                "Configure CORS and middleware",
                "Implement all API routes",
                *[f"Implement {f.name}" for f in features if not has_any(f.name, ("ui",))],
                "Add error handling for every route",
                "Write API documentation",
            ]
        if agent_name == "Frontend Agent":
            framework = stack.frontend.framework if stack.frontend else "the frontend"
            return [
                f"Set up {framework}",
                "Configure Tailwind CSS",
                "Create the component library",
                *[f"Build {f.name} UI" for f in features if has_any(f.name, ("ui", "interface"))],
                "Implement API integration",
                "Ensure responsive design",
            ]
        return AGENT_TASKS.get(agent_name, [])

    def _agent_team(self, plan: PlanOutput) -> list[str]:
        team = plan.team
        lines = [
            f"The build is staffed by {team.total_agents} agents with a combined estimate of "
            f"{_hours(team.estimated_total_hours)}.",
            "",
            "| Agent | Role | Priority | Workload | Hours |",
            "|-------|------|----------|----------|-------|",
            *[
                f"| {a.name} | {a.role} | {a.priority} | {a.workload_percentage}% | "
                f"{_hours(a.estimated_hours)} |"
                for a in team.agents
            ],
            "",
            "### Execution sequence",
            "",
            *_numbered(team.recommended_sequence),
            "",
        ]
        for phase, name in enumerate(team.recommended_sequence, start=1):
            agent = team.get(name)
            if agent is None:
                continue
            lines += [
                f"### {agent.name} (Phase {phase})",
                "",
                "**Responsibilities:**",
                *_bullets(agent.responsibilities),
                "",
                f"**Skills:** {', '.join(agent.skills)}",
                "",
                "**Tasks:**",
                *_numbered(self._agent_tasks(agent.name, plan)),
                "",
                "**Deliverables:**",
                *_bullets(AGENT_DELIVERABLES.get(agent.name, [])),
                "",
            ]
        return lines

    def _functional_requirements(self, plan: PlanOutput) -> list[str]:
        features = plan.research.required_features
        lines = [
            f"{len(features)} features are required. Priorities and complexities come from "
            "the research stage; hours feed the agent estimates in section 6.",
            "",
            "| # | Feature | Priority | Complexity | Hours |",
            "|---|---------|----------|------------|-------|",
            *[
                f"| {i} | {f.name} | {f.priority} | {f.complexity} | {_hours(f.estimated_hours)} |"
                for i, f in enumerate(features, start=1)
            ],
            "",
        ]
        for i, feature in enumerate(features, start=1):
            lines += [
                f"### Feature {i}: {feature.name}",
                "",
                "**Tasks:**",
                *_numbered(feature_tasks(feature)),
                "",
                "**Files:**",
                *_bullets([f"`{path}`" for path in feature_files(feature)]),
                "",
            ]
            deps = feature_dependencies(feature)
            if deps:
                lines += ["**Dependencies:**", *_bullets(deps), ""]
            lines += ["**Acceptance criteria:**", *_checklist(acceptance_criteria(feature)), ""]
        return lines

    def _non_functional_requirements(self, plan: PlanOutput) -> list[str]:
        e = plan.enrichment
        perf = e.nfr_performance if e else None
        sec = e.nfr_security if e else None
        scale = e.nfr_scalability if e else None
        a11y = e.nfr_accessibility if e else None

        page_load = perf.page_load_ms if perf and perf.page_load_ms else DEFAULT_PAGE_LOAD_MS
        api_ms = perf.api_response_ms if perf and perf.api_response_ms else DEFAULT_API_RESPONSE_MS
        lines = [
            "### Performance",
            "",
            *_bullets(
                [
                    f"Page load under {page_load} ms at the 95th percentile",
                    f"API responses under {api_ms} ms at the 95th percentile",
                    (
                        f"Support {perf.concurrent_users} concurrent users"
                        if perf and perf.concurrent_users
                        else "Concurrent user target is set during load testing in section 15"
                    ),
                ]
            ),
            "",
            "### Security",
            "",
            *_bullets(
                [
                    f"Authentication method: {sec.authentication_method}"
                    if sec and sec.authentication_method
                    else "Authentication method: JWT access tokens with refresh rotation",
                    "Encryption at rest: required"
                    if sec and sec.encryption_at_rest
                    else "Encryption at rest: provider default",
                    "Compliance: " + ", ".join(sec.compliance_standards)
                    if sec and sec.compliance_standards
                    else f"Compliance: {NONE_STATED}",
                    "OWASP Top 10 mitigations applied to every endpoint",
                ]
            ),
            "",
            "### Scalability",
            "",
            *_bullets(
                [
                    f"Expected users: {scale.expected_users}"
                    if scale and scale.expected_users
                    else f"Expected users: {NONE_STATED}",
                    f"Peak load: {scale.peak_load} requests/s"
                    if scale and scale.peak_load
                    else f"Peak load: {NONE_STATED}",
                    f"Data volume: {scale.data_volume}"
                    if scale and scale.data_volume
                    else f"Data volume: {NONE_STATED}",
                    f"Scalability tier: {e.scalability_tier}"
                    if e and e.scalability_tier
                    else "Scalability tier: small (default)",
                ]
            ),
            "",
            "### Accessibility",
            "",
            *_bullets(
                [
                    f"WCAG level: {a11y.wcag_level if a11y and a11y.wcag_level else DEFAULT_WCAG}",
                    "Screen reader support: required"
                    if a11y and a11y.screen_reader_support
                    else "Screen reader support: semantic HTML and ARIA labels on controls",
                    "Color contrast ratio of at least 4.5:1 for body text",
                ]
            ),
            "",
            "### Reliability and observability",
            "",
            *_bullets(
                [
                    "99.5% monthly uptime target for the production API",
                    "Structured JSON logs for every request with a correlation id",
                    "Error tracking wired into backend and frontend",
                    "Daily database backups with a tested restore procedure",
                ]
            ),
        ]
        return lines

    def _tool_block(self, tool: ToolRecommendation, setup_label: str = "Installation") -> list[str]:
        install = tool.installation if setup_label == "Setup" else f"`{tool.installation}`"
        return [
            f"#### {tool.name}",
            "",
            f"**Purpose:** {tool.purpose}",
            f"**Priority:** {tool.priority}",
            f"**{setup_label}:** {install}",
            f"**Reason:** {tool.reason}",
            "",
        ]

    def _tools(self, plan: PlanOutput) -> list[str]:
        t = plan.tools
        lines = [f"{t.total_recommendations} recommendations in four categories.", ""]
        groups = (
            ("MCP Servers", t.mcp_servers, "Installation"),
            ("Packages", t.npm_packages, "Installation"),
            ("Development Tools", t.dev_tools, "Installation"),
            ("External Services", t.services, "Setup"),
        )
        for title, tools, label in groups:
            lines += [f"### {title} ({len(tools)})", ""]
            for tool in tools:
                lines.extend(self._tool_block(tool, label))
        return lines

    def _system_architecture(self, plan: PlanOutput) -> list[str]:
        r = plan.research
        return [
            f"**Pattern:** {r.architecture.pattern}",
            "",
            r.architecture.reasoning or NONE_STATED,
            "",
            "The context diagram shows the system boundary and its external dependencies. "
            "The container diagram shows the deployable units inside that boundary and the "
            "protocols between them. Both diagrams use the stack chosen in section 4.",
            "",
            "### System context",
            "",
            "```mermaid",
            plan.diagrams.system_context,
            "```",
            "",
            "### Containers",
            "",
            "```mermaid",
            plan.diagrams.container,
            "```",
        ]

    def _data_model(self, plan: PlanOutput) -> list[str]:
        return [
            f"The data model targets {plan.research.database_type}. Every table carries a "
            "string primary key and creation timestamp; foreign keys reference the owning "
            "user. Schema changes are applied through versioned migrations only.",
            "",
            "```mermaid",
            plan.diagrams.entity_relationship,
            "```",
            "",
            "### Conventions",
            "",
            *_bullets(
                [
                    "Primary keys are UUID strings generated by the application",
                    "Timestamps are stored in UTC",
                    "Soft deletes use a nullable deletedAt column where records need an audit trail",
                    "Every foreign key has an index",
                    "Monetary values use a fixed-precision decimal type",
                ]
            ),
        ]

    def _key_flows(self, plan: PlanOutput) -> list[str]:
        lines = [
            f"{len(plan.diagrams.sequences)} key flows are documented below. Each flow maps to "
            "an end-to-end test in section 15.",
            "",
        ]
        for flow in plan.diagrams.sequences:
            lines += [f"### {flow.title}", "", "```mermaid", flow.source, "```", ""]
        return lines

    def _cost(self, plan: PlanOutput) -> list[str]:
        c = plan.cost
        lines = [
            f"**Confidence Level:** {c.confidence.upper()}",
            "",
            f"**Total Monthly:** {_money(c.total_monthly)}",
            f"**Total Annual:** {_money(c.total_annual)}",
            "",
            "| Service | Category | Monthly | Tier | Assumptions |",
            "|---------|----------|---------|------|-------------|",
            *[
                f"| {item.service} | {item.category} | {_money(item.monthly_estimate)} | "
                f"{item.tier} | {item.assumptions[0] if item.assumptions else NONE_STATED} |"
                for item in c.items
            ],
            "",
        ]
        scaling = [f"{item.service}: {item.scaling_notes}" for item in c.items if item.scaling_notes]
        if scaling:
            lines += ["### Scaling notes", "", *_bullets(scaling), ""]
        if c.development_cost:
            d = c.development_cost
            lines += [
                "### Development cost",
                "",
                f"- **Total Hours:** {_hours(d.total_hours)}",
                f"- **Hourly Rate Range:** ${d.hourly_rate_min:g}-${d.hourly_rate_max:g}/hr",
                f"- **Estimated Cost:** {_money(d.total_min)} to {_money(d.total_max)}",
                "",
            ]
        if c.notes:
            lines += ["**Notes:**", *_bullets(c.notes)]
        return lines

    def _risks(self, plan: PlanOutput) -> list[str]:
        if not plan.risks:
            return ["No significant dependency risks identified."]
        lines = [
            f"{len(plan.risks)} recommended packages carry actionable risk. Low-risk packages "
            "without risk factors are omitted.",
            "",
        ]
        for risk in plan.risks:
            lines += [
                f"### {risk.package_name}",
                "",
                f"**Risk Level:** {RISK_BADGES[risk.risk_level]}",
                f"**Category:** {risk.category or 'general'}",
                "",
                "**Risk Factors:**",
                *_bullets(risk.risk_factors),
                "",
                f"**Mitigation:** {risk.mitigation}",
                "",
            ]
            if risk.alternatives:
                lines += [f"**Alternatives:** {', '.join(risk.alternatives)}", ""]
        return lines

    def _testing(self, plan: PlanOutput) -> list[str]:
        flows = [flow.title for flow in plan.diagrams.sequences]
        return [
            "Coverage target: **80%** of lines and branches for backend services and shared "
            "utilities. The QA agent owns the suite; every other agent adds tests for the "
            "code it writes.",
            "",
            "### Unit tests",
            "",
            *_bullets(
                [
                    "Test all service layer functions",
                    "Test utility functions",
                    "Test data validation schemas",
                ]
            ),
            "",
            "### Integration tests",
            "",
            *_bullets(
                [
                    "Test API endpoints end-to-end against a disposable database",
                    "Test database operations and migrations",
                    "Test authentication flows",
                ]
            ),
            "",
            "### End-to-end tests",
            "",
            *_bullets(
                [f"Test the {title}" for title in flows]
                + ["Test form submissions", "Test navigation and routing"]
            ),
            "",
            "### Tooling",
            "",
            "```bash",
            "npx vitest run --coverage",
            "npx playwright test",
            "```",
        ]

    def _deployment(self, plan: PlanOutput) -> list[str]:
        hosting = [s.name for s in plan.tools.services] or [NONE_STATED]
        return [
            f"**Hosting and services:** {', '.join(hosting)}",
            "",
            "### Environment variables",
            "",
            "```bash",
            *[f"{v}" if "=" in v else f"{v}=your_value_here" for v in ENVIRONMENT_VARIABLES],
            "```",
            "",
            "### Build commands",
            "",
            "```bash",
            *BUILD_COMMANDS,
            "```",
            "",
            "### Deployment steps",
            "",
            *_numbered(list(DEPLOYMENT_STEPS)),
            "",
            "Roll back by redeploying the previous build artifact and, when the release "
            "included a migration, applying its down migration after confirming no new "
            "writes depend on the changed columns.",
        ]

    def _clarifications(self, plan: PlanOutput) -> list[str]:
        answered = [qa for qa in plan.clarifications if not qa.skipped and qa.answer]
        skipped = [qa for qa in plan.clarifications if qa.skipped or not qa.answer]
        lines = []
        if answered:
            lines += ["### Answered questions", ""]
            for qa in answered:
                lines += [f"**Q:** {qa.question}", "", f"**A:** {qa.answer}", ""]
        if skipped:
            lines += ["### Open questions", "", *_bullets([qa.question for qa in skipped]), ""]
        if not plan.clarifications:
            lines += ["No clarification questions were answered for this plan.", ""]
        lines += [
            "### Assumptions",
            "",
            *_bullets(
                [
                    f"Complexity is {plan.research.estimated_complexity} as derived by the "
                    f"{plan.research_mode} research stage",
                    f"Scalability tier is {plan.enrichment.scalability_tier}"
                    if plan.enrichment and plan.enrichment.scalability_tier
                    else "Scalability tier is small until usage data says otherwise",
                    "Cost figures use list prices of the named providers",
                    "Agent hour estimates exclude product discovery and design work",
                ]
            ),
        ]
        return lines

    def _success_criteria(self, plan: PlanOutput) -> list[str]:
        return [
            *_checklist(
                [
                    f"All {len(plan.research.required_features)} features implemented as specified",
                    "All tests passing with >80% coverage",
                    "No critical bugs or open security issues",
                    "API documentation complete",
                    "Deployment successful and health checks green",
                    "Performance targets from section 8 met",
                    "Accessibility standards met (WCAG AA)",
                    f"Monthly infrastructure cost at or below {_money(plan.cost.total_monthly)}",
                ]
            ),
        ]
