# planforge/planning/diagrams.py
"""Mermaid diagram sources: system context, containers, ER model, key flows."""

import logging
from dataclasses import dataclass

from planforge.planning.rules import (
    AUTH_KEYWORDS,
    REALTIME_KEYWORDS,
    any_feature_matches,
    has_any,
)
from planforge.planning.schemas import (
    DiagramSet,
    InputEnrichment,
    ProjectSummary,
    ResearchResult,
    SequenceDiagram,
)

logger = logging.getLogger(__name__)


def _quote(text: str) -> str:
    return text.replace('"', "'").replace("\n", " ").strip()


def system_context(
    summary: ProjectSummary,
    research: ResearchResult,
    enrichment: InputEnrichment | None = None,
) -> str:
    persona = enrichment.personas[0] if enrichment and enrichment.personas else None
    persona_name = persona.name if persona else "User"
    persona_role = (persona.role if persona else "") or "End User"
    names = research.feature_names
    has_payment = any_feature_matches(names, ("payment",))
    has_storage = any_feature_matches(names, ("storage", "file", "upload"))

    lines = [
        "C4Context",
        f"  title System Context for {_quote(summary.project_name)}",
        "",
        f'  Person(user, "{_quote(persona_name)}", "{_quote(persona_role)}")',
        f'  System(app, "{_quote(summary.project_name)}", "{_quote(summary.description)}")',
        '  System_Ext(email, "Email Service", "Sends notifications")',
    ]
    if has_payment:
        lines.append('  System_Ext(payment, "Payment Gateway", "Processes payments")')
    if has_storage:
        lines.append('  System_Ext(storage, "File Storage", "Stores user files")')
    lines += [
        "",
        '  Rel(user, app, "Uses", "HTTPS")',
        '  Rel(app, email, "Sends emails via", "SMTP/API")',
    ]
    if has_payment:
        lines.append('  Rel(app, payment, "Processes payments", "HTTPS")')
    if has_storage:
        lines.append('  Rel(app, storage, "Stores files", "S3 API")')
    return "\n".join(lines)


def container(summary: ProjectSummary, research: ResearchResult) -> str:
    stack = research.recommended_tech_stack
    names = research.feature_names
    has_realtime = any_feature_matches(names, REALTIME_KEYWORDS)
    has_auth = any_feature_matches(names, AUTH_KEYWORDS)
    frontend = stack.frontend.framework if stack.frontend else "React"
    backend = stack.backend.framework if stack.backend else "Express"

    lines = [
        "C4Container",
        f"  title Container Diagram for {_quote(summary.project_name)}",
        "",
        '  Person(user, "User", "Application user")',
        "",
        f'  System_Boundary(app, "{_quote(summary.project_name)}") {{',
        f'    Container(web, "Web Application", "{_quote(frontend)}", "Delivers UI to the browser")',
        f'    Container(api, "API Application", "{_quote(backend)}", "Provides REST API")',
    ]
    if has_realtime:
        lines.append('    Container(ws, "WebSocket Server", "Socket.io/WS", "Real-time communication")')
    if has_auth:
        lines.append('    Container(auth, "Auth Service", "JWT/OAuth", "Handles authentication")')
    lines.append(
        f'    ContainerDb(db, "Database", "{_quote(research.database_type)}", "Stores application data")'
    )
    if has_realtime:
        lines.append('    ContainerDb(cache, "Cache", "Redis", "Session & real-time state")')
    lines += [
        "  }",
        "",
        '  Rel(user, web, "Visits", "HTTPS")',
        '  Rel(web, api, "Makes API calls", "JSON/HTTPS")',
    ]
    if has_realtime:
        lines.append('  Rel(web, ws, "Connects to", "WebSocket")')
    if has_auth:
        lines.append('  Rel(web, auth, "Authenticates", "JWT")')
    lines.append('  Rel(api, db, "Reads/writes", "SQL/ORM")')
    if has_realtime:
        lines.append('  Rel(ws, cache, "Reads/writes", "Redis protocol")')
    if has_auth:
        lines.append('  Rel(auth, db, "Validates credentials", "SQL")')
    return "\n".join(lines)


@dataclass(frozen=True)
class EntityRule:
    """A domain entity inferred from feature text."""

    name: str
    triggers: tuple[str, ...]
    fields: tuple[str, ...]
    owner_relation: str | None = None


USER_ENTITY = EntityRule(
    name="User",
    triggers=("auth", "user", "login"),
    fields=("string id PK", "string email", "string passwordHash", "datetime createdAt"),
)
DOMAIN_ENTITIES: tuple[EntityRule, ...] = (
    EntityRule(
        name="Task",
        triggers=("task", "todo"),
        fields=(
            "string id PK",
            "string userId FK",
            "string title",
            "string description",
            "string status",
            "datetime dueDate",
        ),
        owner_relation="creates",
    ),
    EntityRule(
        name="Project",
        triggers=("project",),
        fields=("string id PK", "string userId FK", "string name", "string description", "datetime createdAt"),
        owner_relation="owns",
    ),
    EntityRule(
        name="Comment",
        triggers=("comment",),
        fields=("string id PK", "string userId FK", "string itemId FK", "string content", "datetime createdAt"),
        owner_relation="writes",
    ),
    EntityRule(
        name="Product",
        triggers=("product", "item"),
        fields=("string id PK", "string name", "string description", "decimal price", "int stock"),
    ),
    EntityRule(
        name="Order",
        triggers=("order", "cart"),
        fields=("string id PK", "string userId FK", "decimal total", "string status", "datetime createdAt"),
        owner_relation="places",
    ),
)
FALLBACK_ENTITIES = (
    EntityRule(
        name="User",
        triggers=(),
        fields=("string id PK", "string email", "datetime createdAt"),
    ),
    EntityRule(
        name="Item",
        triggers=(),
        fields=("string id PK", "string userId FK", "string name", "string data", "datetime createdAt"),
        owner_relation="owns",
    ),
)


def _entity_block(entity: EntityRule) -> list[str]:
    return [f"  {entity.name} {{", *(f"    {f}" for f in entity.fields), "  }"]


def entity_relationship(summary: ProjectSummary, research: ResearchResult) -> str:
    has_user = any_feature_matches(research.feature_names, USER_ENTITY.triggers)
    domain_text = " ".join([*summary.features, *research.feature_names, summary.description])
    domain = [e for e in DOMAIN_ENTITIES if has_any(domain_text, e.triggers)]

    if not has_user and not domain:
        entities = list(FALLBACK_ENTITIES)
        has_user = True
    else:
        entities = ([USER_ENTITY] if has_user else []) + domain

    lines = ["erDiagram"]
    for entity in entities:
        lines += _entity_block(entity)
    if has_user:
        for entity in entities:
            if entity.owner_relation:
                lines.append(f"  User ||--o{{ {entity.name} : {entity.owner_relation}")
    return "\n".join(lines)


AUTH_FLOW = """sequenceDiagram
  participant U as User
  participant F as Frontend
  participant A as API
  participant D as Database

  U->>F: Enter credentials
  F->>A: POST /auth/login
  A->>D: Query user by email
  D-->>A: User record
  A->>A: Verify password hash
  A-->>F: JWT token
  F->>F: Store token
  F-->>U: Redirect to dashboard"""

CRUD_FLOW = """sequenceDiagram
  participant U as User
  participant F as Frontend
  participant A as API
  participant D as Database

  U->>F: Click "Create New"
  F->>F: Show form
  U->>F: Submit form
  F->>A: POST /items (with JWT)
  A->>A: Verify JWT
  A->>D: INSERT INTO items
  D-->>A: New item ID
  A-->>F: 201 Created (item data)
  F->>F: Update UI
  F-->>U: Show success message"""


def sequence_flows(research: ResearchResult) -> list[SequenceDiagram]:
    flows = []
    if any_feature_matches(research.feature_names, AUTH_KEYWORDS):
        flows.append(SequenceDiagram(title="Authentication Flow", source=AUTH_FLOW))
    flows.append(SequenceDiagram(title="Create Item Flow", source=CRUD_FLOW))
    return flows


def generate_diagrams(
    summary: ProjectSummary,
    research: ResearchResult,
    enrichment: InputEnrichment | None = None,
) -> DiagramSet:
    diagrams = DiagramSet(
        system_context=system_context(summary, research, enrichment),
        container=container(summary, research),
        entity_relationship=entity_relationship(summary, research),
        sequences=sequence_flows(research),
    )
    logger.info(f"Generated diagrams for '{summary.project_name}' ({len(diagrams.sequences)} flows)")
    return diagrams
