# planforge/planning/adr/local.py
"""
Templated ADRs built from research output and optional enrichment.

Emits, in order: Technology Stack Selection, Architecture Pattern,
Authentication Strategy (auth features only), Database Schema Design, API
Design Approach, Frontend State Management (complexity above low),
Deployment Strategy, Testing Strategy. Ids are assigned sequentially.
"""

import logging
from datetime import date

from planforge.planning.rules import AUTH_KEYWORDS, any_feature_matches
from planforge.planning.schemas import (
    ADR,
    Alternative,
    ClarificationQA,
    InputEnrichment,
    ProjectSummary,
    ResearchResult,
)

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "None stated"

ARCHITECTURE_ALTERNATIVES = (
    Alternative(
        name="Monolithic",
        pros=["Simple deployment", "Easy local development", "Lower ops cost"],
        cons=["Hard to scale teams", "Technology lock-in", "Deploy entire app for small changes"],
    ),
    Alternative(
        name="Microservices",
        pros=["Independent scaling", "Team autonomy", "Technology flexibility"],
        cons=["High complexity", "DevOps overhead", "Distributed system issues"],
    ),
    Alternative(
        name="Serverless",
        pros=["No server management", "Automatic scaling", "Pay per invocation"],
        cons=["Cold starts", "Vendor lock-in", "Execution time limits"],
    ),
    Alternative(
        name="Modular Monolith",
        pros=["Organized codebase", "Can extract services later", "Simpler than microservices"],
        cons=["Still shares deployment", "Requires discipline", "Not true isolation"],
    ),
)

MONOLITH_CONSEQUENCES = [
    "Faster initial development and deployment",
    "Simpler operational complexity",
    "Easier to debug and test locally",
    "Harder to scale the team as the codebase grows",
    "All components must scale together",
]
MICROSERVICES_CONSEQUENCES = [
    "Independent scaling of services",
    "Team autonomy and parallel development",
    "Higher operational complexity (DevOps, monitoring)",
    "Network latency between services",
    "Distributed system challenges (eventual consistency, partial failures)",
]
SERVERLESS_CONSEQUENCES = [
    "No servers to provision or patch",
    "Scales to zero when idle, per-invocation billing",
    "Cold starts add latency to infrequent requests",
    "Function time and memory limits constrain long jobs",
]
BALANCED_CONSEQUENCES = [
    "Balanced approach to complexity and scalability",
    "Can evolve architecture as needs grow",
    "Moderate operational overhead",
]


def architecture_consequences(pattern: str) -> list[str]:
    lower = pattern.lower()
    if "microservice" in lower:
        return list(MICROSERVICES_CONSEQUENCES)
    if "monolith" in lower:
        return list(MONOLITH_CONSEQUENCES)
    if "serverless" in lower:
        return list(SERVERLESS_CONSEQUENCES)
    return list(BALANCED_CONSEQUENCES)


def architecture_alternatives(pattern: str) -> list[Alternative]:
    """Every known pattern except the chosen one, at most three."""
    lower = pattern.lower()
    remaining = [a for a in ARCHITECTURE_ALTERNATIVES if a.name.lower() not in lower]
    return remaining[:3]


def auth_decision(enrichment: InputEnrichment | None) -> str:
    security = enrichment.nfr_security if enrichment else None
    if security is None:
        return "JWT-based authentication with bcrypt password hashing and secure token storage."

    method = security.authentication_method or "email-password"
    two_factor = method == "two-factor"
    credentials = "encrypted" if security.encryption_at_rest else "hashed"
    return (
        f"{method.replace('-', ' ')} authentication"
        f"{' with TOTP-based 2FA' if two_factor else ''} using {credentials} credentials."
    )


def _tier_and_budget(enrichment: InputEnrichment | None) -> tuple[str, str]:
    tier = (enrichment.scalability_tier if enrichment else None) or "small"
    budget = (enrichment.budget_constraint if enrichment else None) or "low"
    return tier, budget


def deployment_decision(enrichment: InputEnrichment | None) -> str:
    tier, budget = _tier_and_budget(enrichment)
    if tier == "small" and budget != "high":
        return (
            "Deploy to Vercel (frontend) + Railway/Render (backend) for cost-effective "
            "hosting with good DX."
        )
    if tier == "enterprise" or budget == "high":
        return "Deploy to AWS with ECS/Fargate for full control, scalability, and enterprise features."
    return (
        "Deploy to Vercel (frontend) + DigitalOcean App Platform (backend) for balanced "
        "cost and features."
    )


def deployment_consequences(enrichment: InputEnrichment | None) -> list[str]:
    tier, _ = _tier_and_budget(enrichment)
    if tier == "enterprise":
        return [
            "Full control over infrastructure",
            "Headroom for large scale growth",
            "Requires dedicated DevOps expertise",
            "Higher cost but predictable at scale",
            "Comprehensive monitoring and logging",
        ]
    return [
        "Simplified deployment process",
        "Built-in CI/CD pipelines",
        "Lower operational overhead",
        "Migration needed if scale exceeds platform limits",
        "Cost-effective for target scale",
    ]


def _clarification_note(clarifications: list[ClarificationQA] | None, *topics: str) -> str:
    """First answered clarification mentioning one of the topics, as a context suffix."""
    for qa in clarifications or []:
        if qa.skipped or not qa.answer.strip():
            continue
        if any(t in qa.question.lower() for t in topics):
            return f" Stakeholder input: {qa.answer.strip()}"
    return ""


class LocalAdrGenerator:
    """Rule-based ADRs; never raises on well-formed input."""

    def generate(
        self,
        summary: ProjectSummary,
        research: ResearchResult,
        enrichment: InputEnrichment | None = None,
        clarifications: list[ClarificationQA] | None = None,
        today: date | None = None,
    ) -> list[ADR]:
        today = today or date.today()
        drafts = [
            self._tech_stack(summary, research),
            self._architecture(research, enrichment),
        ]
        if any_feature_matches(research.feature_names, AUTH_KEYWORDS):
            drafts.append(self._authentication(enrichment, clarifications))
        drafts.append(self._database(summary, research, enrichment))
        drafts.append(self._api(enrichment, clarifications))
        if research.estimated_complexity != "low":
            drafts.append(self._frontend_state(summary, research))
        drafts.append(self._deployment(enrichment, clarifications))
        drafts.append(self._testing(research))

        adrs = [
            ADR(id=index, date_created=today, **draft)
            for index, draft in enumerate(drafts, start=1)
        ]
        logger.info(f"Generated {len(adrs)} local ADRs for '{summary.project_name}'")
        return adrs

    def _tech_stack(self, summary: ProjectSummary, research: ResearchResult) -> dict:
        stack = research.recommended_tech_stack
        return dict(
            title="Technology Stack Selection",
            context=(
                f"Project {summary.project_name} requires a technology stack that supports "
                f"{len(summary.features)} core features with "
                f"{research.estimated_complexity} complexity."
            ),
            decision=(
                f"Backend: {stack.backend.framework if stack.backend else NOT_SPECIFIED}\n"
                f"Frontend: {stack.frontend.framework if stack.frontend else NOT_SPECIFIED}\n"
                f"Database: {stack.database.type if stack.database else NOT_SPECIFIED}"
            ),
            consequences=[
                "Development team must have or acquire expertise in chosen technologies",
                "Ecosystem maturity provides strong community support and libraries",
                "Type safety (if TypeScript) reduces runtime errors and improves maintainability",
                "Migration to a different stack would be costly in the future",
            ],
            alternatives=[
                Alternative(
                    name="MERN Stack (MongoDB, Express, React, Node)",
                    pros=["JavaScript everywhere", "Large community", "Flexible NoSQL"],
                    cons=["NoSQL fits relational data poorly", "Less type safety without TypeScript"],
                ),
                Alternative(
                    name="Django + React",
                    pros=["Batteries included", "Admin panel", "ORM"],
                    cons=["Python learning curve", "Slower than Node for real-time"],
                ),
            ],
        )

    def _architecture(
        self, research: ResearchResult, enrichment: InputEnrichment | None
    ) -> dict:
        pattern = research.architecture.pattern
        style = enrichment.architecture_style if enrichment else None
        preference = f" (user preference: {style})" if style and style != "auto" else ""
        return dict(
            title=f"Architecture Pattern: {pattern}",
            context=research.architecture.reasoning or f"The project needs a {pattern} structure.",
            decision=f"Implement {pattern} architecture{preference}.",
            consequences=architecture_consequences(pattern),
            alternatives=architecture_alternatives(pattern),
        )

    def _authentication(
        self,
        enrichment: InputEnrichment | None,
        clarifications: list[ClarificationQA] | None,
    ) -> dict:
        security = enrichment.nfr_security if enrichment else None
        method = (
            f" with {security.authentication_method or 'standard'} method" if security else ""
        )
        consequences = [
            "User accounts provide personalization and security",
            "Session management adds complexity",
            "Password storage requires secure hashing (bcrypt/argon2)",
            "Must handle password reset flows",
        ]
        if security and security.authentication_method == "two-factor":
            consequences.append("2FA significantly improves security but adds friction")
        return dict(
            title="Authentication Strategy",
            context=(
                f"Application requires user authentication{method}."
                f"{_clarification_note(clarifications, 'auth', 'login')}"
            ),
            decision=auth_decision(enrichment),
            consequences=consequences,
            alternatives=[
                Alternative(
                    name="JWT Tokens",
                    pros=["Stateless", "Scalable", "Works across domains"],
                    cons=["Cannot invalidate before expiry", "Token size larger than session ID"],
                ),
                Alternative(
                    name="Session Cookies",
                    pros=["Can invalidate immediately", "Smaller size", "Familiar pattern"],
                    cons=["Requires session storage", "Awkward for mobile apps"],
                ),
            ],
        )

    def _database(
        self,
        summary: ProjectSummary,
        research: ResearchResult,
        enrichment: InputEnrichment | None,
    ) -> dict:
        db_type = research.recommended_tech_stack.database
        scalability = enrichment.nfr_scalability if enrichment else None
        scale = (
            f"~{scalability.expected_users} users"
            if scalability and scalability.expected_users
            else "moderate scale"
        )
        data_kinds = len(summary.features) or len(research.required_features)
        is_document_store = db_type is not None and "mongo" in db_type.type.lower()
        second = (
            Alternative(
                name="Relational Database (PostgreSQL)",
                pros=["Strong consistency", "Joins and constraints", "Mature tooling"],
                cons=["Rigid schema", "Migrations for every change"],
            )
            if is_document_store
            else Alternative(
                name="Document Store (MongoDB)",
                pros=["Flexible schema", "Natural fit for nested data", "Fast prototyping"],
                cons=["Weak cross-document integrity", "Harder ad hoc reporting"],
            )
        )
        return dict(
            title="Database Schema Design",
            context=f"Application needs to store {data_kinds} kinds of data with {scale}.",
            decision=(
                f"Use {db_type.type if db_type else 'a relational database'} "
                "with normalized schema design."
            ),
            consequences=[
                "Normalized design reduces data redundancy",
                "Foreign keys maintain referential integrity",
                "Indexes improve query performance",
                "Schema migrations must be carefully managed",
                "Denormalize selectively for high-read paths",
            ],
            alternatives=[
                Alternative(
                    name="Denormalized Schema",
                    pros=["Faster reads", "Simpler queries", "Better for analytics"],
                    cons=["Data redundancy", "Update complexity", "Storage overhead"],
                ),
                second,
            ],
        )

    def _api(
        self,
        enrichment: InputEnrichment | None,
        clarifications: list[ClarificationQA] | None,
    ) -> dict:
        approach = enrichment.approach_preference if enrichment else None
        context = (
            "API-first development prioritizes backend completion before frontend."
            if approach == "api-first"
            else "Balanced development approach with iterative frontend-backend integration."
        )
        strategy = f" ({approach} strategy)" if approach else ""
        return dict(
            title="API Design Approach",
            context=context + _clarification_note(clarifications, "api first", "ui first"),
            decision=f"RESTful API with JSON responses{strategy}.",
            consequences=[
                "RESTful patterns are well-understood by most developers",
                "Easy to test with tools like Postman/Insomnia",
                "Versioning strategy needed for breaking changes",
                "GraphQL remains an option for complex data requirements later",
            ],
            alternatives=[
                Alternative(
                    name="GraphQL",
                    pros=["Flexible queries", "Single endpoint", "Strong typing", "Avoid over-fetching"],
                    cons=["Learning curve", "Caching complexity", "More backend setup"],
                ),
                Alternative(
                    name="gRPC",
                    pros=["High performance", "Strong typing", "Bi-directional streaming"],
                    cons=["Limited browser support", "Requires protocol buffers", "Smaller ecosystem"],
                ),
            ],
        )

    def _frontend_state(self, summary: ProjectSummary, research: ResearchResult) -> dict:
        frontend = research.recommended_tech_stack.frontend
        is_vue = frontend is not None and "vue" in frontend.framework.lower()
        feature_count = len(summary.features) or len(research.required_features)
        if is_vue:
            decision = "Use Pinia stores for global state, component state for local data."
            consequences = [
                "Pinia is the official Vue store with DevTools support",
                "Stores are modular and type-safe",
                "Global state must be kept small to avoid coupling",
                "Server state caching needs a separate strategy",
            ]
            alternatives = [
                Alternative(
                    name="Vuex",
                    pros=["Mature", "Large ecosystem"],
                    cons=["More boilerplate", "Superseded by Pinia"],
                ),
                Alternative(
                    name="Composables with provide/inject",
                    pros=["No dependency", "Minimal API"],
                    cons=["No DevTools timeline", "Harder to scale"],
                ),
            ]
        else:
            decision = "Use React Context API for global state, local state for component-specific data."
            consequences = [
                "Context API is built-in, no additional dependencies",
                "Simpler than Redux for medium complexity",
                "Upgrade to Zustand/Redux if state grows complex",
                "Performance considerations with frequent context updates",
            ]
            alternatives = [
                Alternative(
                    name="Redux Toolkit",
                    pros=["Predictable state", "DevTools", "Large ecosystem", "Best for complex apps"],
                    cons=["Boilerplate code", "Learning curve", "Overkill for simple apps"],
                ),
                Alternative(
                    name="Zustand",
                    pros=["Minimal boilerplate", "Simple API", "Good performance"],
                    cons=["Smaller community than Redux", "Fewer middleware options"],
                ),
            ]
        return dict(
            title="Frontend State Management",
            context=(
                f"Application with {feature_count} features requires organized state management."
            ),
            decision=decision,
            consequences=consequences,
            alternatives=alternatives,
        )

    def _deployment(
        self,
        enrichment: InputEnrichment | None,
        clarifications: list[ClarificationQA] | None,
    ) -> dict:
        tier = (enrichment.scalability_tier if enrichment else None) or "moderate"
        budget = (enrichment.budget_constraint if enrichment else None) or "reasonable"
        return dict(
            title="Deployment Strategy",
            context=(
                f"Application needs {tier} scalability with {budget} budget constraints."
                f"{_clarification_note(clarifications, 'scale', 'budget', 'deploy')}"
            ),
            decision=deployment_decision(enrichment),
            consequences=deployment_consequences(enrichment),
            alternatives=[
                Alternative(
                    name="AWS ECS/Fargate",
                    pros=["Full control", "Scales to large workloads", "Mature ecosystem"],
                    cons=["More complex setup", "Higher operational overhead", "Costlier than PaaS"],
                ),
                Alternative(
                    name="DigitalOcean App Platform",
                    pros=["Simple deployment", "Affordable", "Good DX"],
                    cons=["Less flexible than AWS", "Smaller feature set"],
                ),
            ],
        )

    def _testing(self, research: ResearchResult) -> dict:
        return dict(
            title="Testing Strategy",
            context=(
                f"{research.estimated_complexity.capitalize()} complexity project requires "
                "appropriate test coverage to ensure quality."
            ),
            decision=(
                "Implement unit tests for business logic, integration tests for API "
                "endpoints, E2E tests for critical user flows."
            ),
            consequences=[
                "Unit tests provide fast feedback during development",
                "Integration tests catch API contract issues",
                "E2E tests ensure user flows work end-to-end",
                "Test maintenance overhead must be balanced with coverage",
                "Target 70-80% code coverage, 100% for critical paths",
            ],
            alternatives=[
                Alternative(
                    name="Test-Driven Development (TDD)",
                    pros=["Better design", "Higher coverage", "Fewer bugs"],
                    cons=["Slower initial development", "Requires discipline"],
                ),
                Alternative(
                    name="Manual Testing Only",
                    pros=["Faster initial development", "No test code maintenance"],
                    cons=["Regression bugs", "Slower long-term", "Not scalable"],
                ),
            ],
        )
