# planforge/planning/tools.py
"""Table-driven tool, package and service recommendations."""

import logging

from planforge.planning.rules import AUTH_KEYWORDS, any_feature_matches
from planforge.planning.schemas import (
    ProjectSummary,
    ResearchResult,
    ToolRecommendation,
    ToolRecommendations,
)

logger = logging.getLogger(__name__)


def _tool(**fields) -> ToolRecommendation:
    return ToolRecommendation(**fields)


FILESYSTEM_SERVER = _tool(
    name="Filesystem MCP Server",
    category="mcp-server",
    purpose="Read, write, and manage project files during development",
    installation="npx -y @modelcontextprotocol/server-filesystem",
    priority="required",
    reason="Essential for code generation and file manipulation",
)
GIT_SERVER = _tool(
    name="Git MCP Server",
    category="mcp-server",
    purpose="Version control and repository management",
    installation="npx -y @modelcontextprotocol/server-git",
    priority="recommended",
    reason="Enables automated commits and version control",
)
FETCH_SERVER = _tool(
    name="Fetch MCP Server",
    category="mcp-server",
    purpose="Test API endpoints and make HTTP requests",
    installation="npx -y @modelcontextprotocol/server-fetch",
    priority="recommended",
    reason="Essential for API testing and validation",
)

# (database substring, server)
DATABASE_SERVERS: tuple[tuple[str, ToolRecommendation], ...] = (
    (
        "postgres",
        _tool(
            name="PostgreSQL MCP Server",
            category="mcp-server",
            purpose="Direct PostgreSQL database operations and queries",
            installation="npx -y @modelcontextprotocol/server-postgres",
            priority="recommended",
            reason="Useful for database schema management and testing",
        ),
    ),
    (
        "sqlite",
        _tool(
            name="SQLite MCP Server",
            category="mcp-server",
            purpose="SQLite database operations",
            installation="npx -y @modelcontextprotocol/server-sqlite",
            priority="recommended",
            reason="Direct database access for development",
        ),
    ),
)

# (framework substring, bundle); every matching entry is added
BACKEND_BUNDLES: tuple[tuple[str, list[ToolRecommendation]], ...] = (
    (
        "express",
        [
            _tool(
                name="Express.js",
                category="npm-package",
                purpose="Backend web server framework",
                installation="npm install express cors dotenv",
                priority="required",
                reason="Core backend framework",
                packages=["express", "cors", "dotenv"],
                scope="backend",
            ),
            _tool(
                name="Express Middleware",
                category="npm-package",
                purpose="Request validation, logging, error handling",
                installation="npm install express-validator morgan helmet",
                priority="recommended",
                reason="Essential middleware for production-ready API",
                packages=["express-validator", "morgan", "helmet"],
                scope="backend",
            ),
        ],
    ),
    (
        "fastapi",
        [
            _tool(
                name="FastAPI",
                category="npm-package",
                purpose="Async Python web framework with OpenAPI generation",
                installation="pip install fastapi uvicorn pydantic",
                priority="required",
                reason="Core backend framework",
                packages=["fastapi", "uvicorn", "pydantic"],
                scope="backend",
            ),
        ],
    ),
    (
        "gin",
        [
            _tool(
                name="Gin",
                category="npm-package",
                purpose="HTTP web framework for Go",
                installation="go get github.com/gin-gonic/gin",
                priority="required",
                reason="Core backend framework",
                packages=["github.com/gin-gonic/gin"],
                scope="backend",
            ),
        ],
    ),
)

FRONTEND_BUNDLES: tuple[tuple[str, list[ToolRecommendation]], ...] = (
    (
        "next",
        [
            _tool(
                name="Next.js",
                category="npm-package",
                purpose="React framework with SSR and routing",
                installation="npx create-next-app@latest",
                priority="required",
                reason="Core frontend framework",
                packages=["next", "react", "react-dom"],
                scope="frontend",
            ),
        ],
    ),
    (
        "vite",
        [
            _tool(
                name="React + Vite",
                category="npm-package",
                purpose="React single-page app with a fast dev server",
                installation="npm create vite@latest -- --template react-ts",
                priority="required",
                reason="Core frontend framework",
                packages=["react", "react-dom", "vite"],
                scope="frontend",
            ),
        ],
    ),
    (
        "vue",
        [
            _tool(
                name="Vue 3",
                category="npm-package",
                purpose="Progressive frontend framework with Composition API",
                installation="npm create vue@latest",
                priority="required",
                reason="Core frontend framework",
                packages=["vue", "vue-router", "pinia"],
                scope="frontend",
            ),
        ],
    ),
)

TYPESCRIPT = _tool(
    name="TypeScript",
    category="npm-package",
    purpose="Type-safe JavaScript development",
    installation="npm install -D typescript @types/node tsx",
    priority="required",
    reason="Type safety and better developer experience",
    packages=["typescript", "@types/node", "tsx"],
    scope="dev",
)
PRISMA = _tool(
    name="Prisma ORM",
    category="npm-package",
    purpose="Type-safe database access and schema management",
    installation="npm install @prisma/client && npm install -D prisma",
    priority="required",
    reason="Modern ORM with excellent TypeScript support",
    packages=["@prisma/client", "prisma"],
    scope="backend",
)
PRISMA_DATABASES = ("postgres", "mysql", "sqlite")
AUTH_LIBRARIES = _tool(
    name="Authentication Libraries",
    category="npm-package",
    purpose="JWT tokens, password hashing, session management",
    installation="npm install jsonwebtoken bcrypt express-session",
    priority="required",
    reason="Secure authentication implementation",
    packages=["jsonwebtoken", "bcrypt", "express-session"],
    scope="backend",
)
BASELINE_PACKAGES = (
    _tool(
        name="Tailwind CSS",
        category="npm-package",
        purpose="Utility-first CSS framework",
        installation="npm install -D tailwindcss postcss autoprefixer",
        priority="recommended",
        reason="Rapid UI development with consistent styling",
        packages=["tailwindcss", "postcss", "autoprefixer"],
        scope="dev",
    ),
    _tool(
        name="Zod",
        category="npm-package",
        purpose="Runtime type validation and schema definition",
        installation="npm install zod",
        priority="required",
        reason="Validate API requests and user input",
        packages=["zod"],
        scope="backend",
    ),
    _tool(
        name="Testing Libraries",
        category="npm-package",
        purpose="Unit, integration, and E2E testing",
        installation="npm install -D vitest @testing-library/react @testing-library/jest-dom",
        priority="recommended",
        reason="Comprehensive testing suite",
        packages=["vitest", "@testing-library/react", "@testing-library/jest-dom"],
        scope="dev",
    ),
)

DEV_TOOLS = (
    _tool(
        name="Prettier",
        category="dev-tool",
        purpose="Code formatting and style consistency",
        installation="npm install -D prettier",
        priority="recommended",
        reason="Maintain consistent code style across team",
        packages=["prettier"],
        scope="dev",
    ),
    _tool(
        name="ESLint",
        category="dev-tool",
        purpose="Code quality and best practices enforcement",
        installation="npm install -D eslint @typescript-eslint/parser",
        priority="recommended",
        reason="Catch errors and enforce coding standards",
        packages=["eslint", "@typescript-eslint/parser"],
        scope="dev",
    ),
    _tool(
        name="Husky",
        category="dev-tool",
        purpose="Git hooks for pre-commit checks",
        installation="npm install -D husky lint-staged",
        priority="optional",
        reason="Enforce quality checks before commits",
        packages=["husky", "lint-staged"],
        scope="dev",
    ),
    _tool(
        name="Swagger/OpenAPI",
        category="dev-tool",
        purpose="API documentation and testing interface",
        installation="npm install swagger-ui-express swagger-jsdoc",
        priority="optional",
        reason="Interactive API documentation",
        packages=["swagger-ui-express", "swagger-jsdoc"],
        scope="dev",
    ),
)

VERCEL = _tool(
    name="Vercel",
    category="service",
    purpose="Frontend and API hosting with automatic deployments",
    installation="Sign up at vercel.com and connect GitHub repo",
    priority="recommended",
    reason="Zero-config Next.js deployments with excellent DX",
)
MANAGED_POSTGRES = _tool(
    name="Supabase / Neon",
    category="service",
    purpose="Managed PostgreSQL database hosting",
    installation="Sign up at supabase.com or neon.tech",
    priority="recommended",
    reason="Free tier available, automatic backups, connection pooling",
)
SENTRY = _tool(
    name="Sentry",
    category="service",
    purpose="Error tracking and performance monitoring",
    installation="npm install @sentry/node @sentry/react",
    priority="recommended",
    reason="Real-time error tracking and debugging",
    packages=["@sentry/node", "@sentry/react"],
    scope="backend",
)
ANALYTICS = _tool(
    name="Vercel Analytics / Plausible",
    category="service",
    purpose="Privacy-friendly website analytics",
    installation="Enable in Vercel dashboard or sign up at plausible.io",
    priority="optional",
    reason="Understand user behavior without cookies",
)


def recommend_mcp_servers(research: ResearchResult) -> list[ToolRecommendation]:
    db_type = research.database_type.lower()
    servers = [FILESYSTEM_SERVER, GIT_SERVER]
    for needle, server in DATABASE_SERVERS:
        if needle in db_type:
            servers.append(server)
            break
    servers.append(FETCH_SERVER)
    return servers


def recommend_packages(research: ResearchResult) -> list[ToolRecommendation]:
    stack = research.recommended_tech_stack
    backend = stack.backend.framework.lower() if stack.backend else ""
    frontend = stack.frontend.framework.lower() if stack.frontend else ""
    db_type = research.database_type.lower()

    packages: list[ToolRecommendation] = []
    for needle, bundle in BACKEND_BUNDLES:
        if needle in backend:
            packages.extend(bundle)
    if "typescript" in backend or "typescript" in frontend:
        packages.append(TYPESCRIPT)
    if any(db in db_type for db in PRISMA_DATABASES):
        packages.append(PRISMA)
    if any_feature_matches(research.feature_names, AUTH_KEYWORDS):
        packages.append(AUTH_LIBRARIES)
    for needle, bundle in FRONTEND_BUNDLES:
        if needle in frontend:
            packages.extend(bundle)
            break
    packages.extend(BASELINE_PACKAGES)
    return packages


def recommend_services(research: ResearchResult) -> list[ToolRecommendation]:
    complexity = research.estimated_complexity
    services: list[ToolRecommendation] = []
    if complexity in ("low", "medium"):
        services.append(VERCEL)
    if "postgres" in research.database_type.lower():
        services.append(MANAGED_POSTGRES)
    if complexity == "high":
        services.append(SENTRY)
    services.append(ANALYTICS)
    return services


def recommend(summary: ProjectSummary, research: ResearchResult) -> ToolRecommendations:
    """Categorized recommendations; pure function of its inputs."""
    recommendations = ToolRecommendations.build(
        mcp_servers=recommend_mcp_servers(research),
        npm_packages=recommend_packages(research),
        dev_tools=list(DEV_TOOLS),
        services=recommend_services(research),
    )
    logger.info(
        f"Tool recommendations for '{summary.project_name}': "
        f"{recommendations.total_recommendations} total"
    )
    return recommendations
