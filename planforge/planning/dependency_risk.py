# planforge/planning/dependency_risk.py
"""
Risk findings for recommended packages.

Each package name is matched by substring against fixed category lists. The
highest matching level wins; on equal levels the later list sets the
category. Packages that end at level low with no risk factors are dropped.
"""

import logging
from dataclasses import dataclass

from planforge.planning.schemas import DependencyRisk, ToolRecommendations

logger = logging.getLogger(__name__)

RISK_ORDER = {"low": 0, "medium": 1, "high": 2, "critical": 3}


@dataclass(frozen=True)
class RiskList:
    """A named package list with the level, category and factors it implies."""

    name: str
    packages: tuple[str, ...]
    level: str
    category: str
    factors: tuple[str, ...]
    scopes: tuple[str, ...] = ()

    def matches(self, package: str, scope: str) -> bool:
        if self.scopes and scope not in self.scopes:
            return False
        lowered = package.lower()
        return any(p in lowered for p in self.packages)


RISK_LISTS: tuple[RiskList, ...] = (
    RiskList(
        name="security-critical",
        packages=("bcrypt", "bcryptjs", "crypto", "helmet", "cors", "express-validator"),
        level="medium",
        category="security",
        factors=(
            "Security-critical package: vulnerabilities have high impact",
            "Must keep updated with security patches",
        ),
    ),
    RiskList(
        name="auth",
        packages=("jsonwebtoken", "passport", "jose", "iron-session", "next-auth"),
        level="medium",
        category="security",
        factors=(
            "Authentication critical: must stay current",
            "Breaking changes can affect user access",
        ),
    ),
    RiskList(
        name="database-driver",
        packages=("pg", "mysql", "mongodb", "redis", "@prisma/client"),
        level="medium",
        category="compatibility",
        factors=(
            "Database driver: breaking changes are common between majors",
            "Version must match database version",
        ),
    ),
    RiskList(
        name="large-bundle",
        packages=("moment", "lodash", "@material-ui"),
        level="low",
        category="performance",
        factors=("Large bundle size impacts page load performance",),
        scopes=("frontend",),
    ),
    RiskList(
        name="known-problematic",
        packages=("node-sass",),
        level="high",
        category="maintenance",
        factors=(
            "Package has a history of breaking changes",
            "Check changelogs carefully before upgrading",
        ),
    ),
)

MITIGATIONS = {
    "security": (
        "Pin the major version, use Dependabot/Renovate for automated security updates, "
        "and audit regularly with npm audit"
    ),
    "maintenance": "Read release notes before upgrading, test thoroughly, and pin versions",
    "performance": "Use code splitting, lazy loading, or a lighter alternative package",
    "compatibility": (
        "Ensure version compatibility with your stack and test migrations in a staging environment"
    ),
    "licensing": "Monitor for updates and review license compatibility with your project",
}

ALTERNATIVES = {
    "moment": ["date-fns", "dayjs", "luxon"],
    "lodash": ["lodash-es (tree-shakeable)", "ramda", "native JS methods"],
    "jsonwebtoken": ["jose", "paseto"],
    "node-sass": ["sass (Dart Sass)", "postcss"],
    "axios": ["fetch API", "ky", "got"],
    "bcrypt": ["bcryptjs (pure JS)", "argon2"],
}


def alternatives_for(package: str) -> list[str] | None:
    lowered = package.lower()
    for key, alts in ALTERNATIVES.items():
        if key in lowered:
            return list(alts)
    return None


def analyze_package(package: str, scope: str = "none") -> DependencyRisk | None:
    """Classify one package; None when nothing actionable was found."""
    level = "low"
    category = "maintenance"
    factors: list[str] = []

    for risk_list in RISK_LISTS:
        if not risk_list.matches(package, scope):
            continue
        factors.extend(risk_list.factors)
        if RISK_ORDER[risk_list.level] >= RISK_ORDER[level]:
            level = risk_list.level
            category = risk_list.category

    if level == "low" and not factors:
        return None

    return DependencyRisk(
        package_name=package,
        risk_level=level,
        risk_factors=factors,
        mitigation=MITIGATIONS[category],
        alternatives=alternatives_for(package),
        category=category,
    )


def analyze(tools: ToolRecommendations) -> list[DependencyRisk]:
    """Actionable risk findings for every recommended package, in recommendation order."""
    risks = []
    for package, scope in tools.package_entries():
        risk = analyze_package(package, scope)
        if risk is not None:
            risks.append(risk)
    logger.info(f"Dependency risk: {len(risks)} findings across {len(tools.package_entries())} packages")
    return risks
