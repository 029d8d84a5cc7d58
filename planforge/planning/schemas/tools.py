# planforge/planning/schemas/tools.py
"""Schema for tool, package and service recommendations."""

from typing import Literal

from pydantic import Field

from .base import PlannerModel

PackageScope = Literal["backend", "frontend", "dev", "none"]


class ToolRecommendation(PlannerModel):
    name: str
    category: Literal["mcp-server", "npm-package", "dev-tool", "service"]
    purpose: str
    installation: str
    priority: Literal["required", "recommended", "optional"]
    reason: str
    packages: list[str] = Field(
        default_factory=list, description="Installable package names this recommendation pulls in"
    )
    scope: PackageScope = "none"


class ToolRecommendations(PlannerModel):
    mcp_servers: list[ToolRecommendation] = Field(default_factory=list)
    npm_packages: list[ToolRecommendation] = Field(default_factory=list)
    dev_tools: list[ToolRecommendation] = Field(default_factory=list)
    services: list[ToolRecommendation] = Field(default_factory=list)
    total_recommendations: int = 0

    @classmethod
    def build(
        cls,
        mcp_servers: list[ToolRecommendation],
        npm_packages: list[ToolRecommendation],
        dev_tools: list[ToolRecommendation],
        services: list[ToolRecommendation],
    ) -> "ToolRecommendations":
        return cls(
            mcp_servers=mcp_servers,
            npm_packages=npm_packages,
            dev_tools=dev_tools,
            services=services,
            total_recommendations=(
                len(mcp_servers) + len(npm_packages) + len(dev_tools) + len(services)
            ),
        )

    def package_entries(self) -> list[tuple[str, PackageScope]]:
        """Every (package, scope) pair in recommendation order, first occurrence only."""
        seen: set[str] = set()
        entries: list[tuple[str, PackageScope]] = []
        for rec in [*self.npm_packages, *self.dev_tools, *self.services]:
            for package in rec.packages:
                if package not in seen:
                    seen.add(package)
                    entries.append((package, rec.scope))
        return entries
