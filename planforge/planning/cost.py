# planforge/planning/cost.py
"""
Line-itemized infrastructure and development cost estimate.

Prices are static lookup tables keyed by scalability tier. Tiers other than
small and medium use the large-scale price list.
"""

import logging

from planforge.planning.rules import REALTIME_KEYWORDS, any_feature_matches
from planforge.planning.schemas import (
    AgentTeam,
    CostEstimate,
    CostItem,
    DevelopmentCost,
    InputEnrichment,
    ProjectSummary,
    ResearchResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TIER = "small"
HOURLY_RATE_MIN = 50
HOURLY_RATE_MAX = 150

STORAGE_KEYWORDS = ("upload", "file", "image", "media")
EMAIL_KEYWORDS = ("email", "notification")
PAYMENT_KEYWORDS = ("payment", "checkout")

ESTIMATE_NOTES = [
    "Estimates assume moderate usage patterns",
    "Free tiers are used where the provider offers one",
    "Costs scale with actual usage",
    "Enterprise plans can include volume discounts",
]

FRONTEND_HOSTING = {
    "small": dict(
        service="Vercel (Frontend)",
        monthly_estimate=0,
        tier="Free",
        assumptions=["100GB bandwidth/mo", "10K serverless function invocations", "Unlimited static requests"],
        scaling_notes="Pro plan ($20/mo) adds 1TB bandwidth, 1M invocations",
    ),
    "medium": dict(
        service="Vercel (Frontend)",
        monthly_estimate=20,
        tier="Pro",
        assumptions=["1TB bandwidth/mo", "1M serverless invocations", "Team features"],
        scaling_notes="Handles 10K-50K monthly users",
    ),
    "large": dict(
        service="AWS CloudFront + S3 (Frontend)",
        monthly_estimate=50,
        tier="Pay-as-you-go",
        assumptions=["100GB data transfer", "10M requests", "CDN distribution"],
        scaling_notes="Scales linearly with usage",
    ),
}

BACKEND_HOSTING = {
    "small": dict(
        service="Render/Railway (Backend)",
        monthly_estimate=7,
        tier="Starter",
        assumptions=["512MB RAM", "Sleep after inactivity", "100GB bandwidth"],
        scaling_notes="Standard plan ($21/mo) for always-on + 2GB RAM",
    ),
    "medium": dict(
        service="DigitalOcean App Platform (Backend)",
        monthly_estimate=24,
        tier="Professional",
        assumptions=["1GB RAM", "Always-on", "500GB bandwidth"],
        scaling_notes="Scales to 4GB RAM for $48/mo",
    ),
    "large": dict(
        service="AWS ECS Fargate (Backend)",
        monthly_estimate=45,
        tier="Pay-as-you-go",
        assumptions=["0.5 vCPU", "1GB RAM", "24/7 uptime"],
        scaling_notes="Auto-scales with demand",
    ),
}

# service names take the database type via str.format
DATABASE_HOSTING = {
    "small": dict(
        service="Supabase/Neon ({db})",
        monthly_estimate=0,
        tier="Free",
        assumptions=["500MB storage", "2GB bandwidth", "Pauseable compute"],
        scaling_notes="Pro plan ($25/mo) adds 8GB storage, 50GB bandwidth",
    ),
    "medium": dict(
        service="Supabase/Neon ({db})",
        monthly_estimate=25,
        tier="Pro",
        assumptions=["8GB storage", "50GB bandwidth", "Always-on compute"],
        scaling_notes="Handles 10K-50K rows",
    ),
    "large": dict(
        service="AWS RDS ({db})",
        monthly_estimate=75,
        tier="db.t3.small",
        assumptions=["20GB SSD storage", "Multi-AZ not included", "Automated backups"],
        scaling_notes="Scale to db.t3.medium ($150/mo) for higher load",
    ),
}

CACHE = {
    "medium": dict(
        service="Upstash Redis (Cache)",
        monthly_estimate=10,
        tier="Standard",
        assumptions=["10K commands/day", "Persistent storage"],
    ),
    "large": dict(
        service="Upstash Redis (Cache)",
        monthly_estimate=30,
        tier="Pro",
        assumptions=["100K commands/day", "Persistent storage"],
    ),
}

STORAGE = {
    "small": dict(
        service="Cloudinary (Image/Media)",
        monthly_estimate=0,
        tier="Free",
        assumptions=["25GB storage", "25GB bandwidth", "Basic transformations"],
        scaling_notes="Plus plan ($99/mo) adds 200GB storage",
    ),
    "medium": dict(
        service="AWS S3 + CloudFront (Files)",
        monthly_estimate=15,
        tier="Pay-as-you-go",
        assumptions=["50GB storage", "CDN delivery"],
    ),
    "large": dict(
        service="AWS S3 + CloudFront (Files)",
        monthly_estimate=50,
        tier="Pay-as-you-go",
        assumptions=["200GB storage", "CDN delivery"],
    ),
}

EXTRA_BANDWIDTH = dict(
    service="Additional Bandwidth",
    monthly_estimate=30,
    tier="Overage charges",
    assumptions=["500GB additional beyond included limits"],
    scaling_notes="Scales with actual usage",
)

EMAIL = dict(
    service="SendGrid/Resend (Email)",
    monthly_estimate=0,
    tier="Free",
    assumptions=["100 emails/day", "Basic templates"],
    scaling_notes="Essentials plan ($20/mo) adds 50K emails/mo",
)
PAYMENTS = dict(
    service="Stripe (Payments)",
    monthly_estimate=50,
    tier="Pay-per-transaction",
    assumptions=["$10K revenue/mo", "2.9% + $0.30 per transaction"],
    scaling_notes="Costs scale with transaction volume",
)
ANALYTICS = dict(
    service="Vercel Analytics / Plausible",
    monthly_estimate=0,
    tier="Free/Included",
    assumptions=["10K pageviews/mo", "Basic analytics"],
    scaling_notes="Plausible ($9/mo) for 10K events",
)
ERROR_TRACKING = dict(
    service="Sentry (Error Tracking)",
    monthly_estimate=0,
    tier="Free",
    assumptions=["5K errors/mo", "Basic alerting"],
    scaling_notes="Team plan ($26/mo) adds 50K errors",
)


def scalability_tier(enrichment: InputEnrichment | None) -> str:
    """The enrichment tier, or small when none was given."""
    if enrichment is None or not enrichment.scalability_tier:
        return DEFAULT_TIER
    return enrichment.scalability_tier


def _price_key(tier: str) -> str:
    return tier if tier in ("small", "medium") else "large"


def _item(category: str, entry: dict, **overrides) -> CostItem:
    return CostItem(category=category, **{**entry, **overrides})


def hosting_items(tier: str) -> list[CostItem]:
    key = _price_key(tier)
    return [
        _item("hosting", FRONTEND_HOSTING[key]),
        _item("hosting", BACKEND_HOSTING[key]),
    ]


def database_items(research: ResearchResult, tier: str) -> list[CostItem]:
    key = _price_key(tier)
    entry = DATABASE_HOSTING[key]
    items = [_item("database", entry, service=entry["service"].format(db=research.database_type))]
    if tier != "small" and any_feature_matches(research.feature_names, REALTIME_KEYWORDS):
        items.append(_item("database", CACHE[key]))
    return items


def storage_items(summary: ProjectSummary, tier: str) -> list[CostItem]:
    if not any_feature_matches(summary.features, STORAGE_KEYWORDS):
        return []
    return [_item("storage", STORAGE[_price_key(tier)])]


def bandwidth_items(tier: str) -> list[CostItem]:
    if tier != "enterprise":
        return []
    return [_item("bandwidth", EXTRA_BANDWIDTH)]


def third_party_items(summary: ProjectSummary, research: ResearchResult) -> list[CostItem]:
    items = []
    if any_feature_matches(summary.features, EMAIL_KEYWORDS):
        items.append(_item("third-party", EMAIL))
    if any_feature_matches(summary.features, PAYMENT_KEYWORDS):
        items.append(_item("third-party", PAYMENTS))
    items.append(_item("third-party", ANALYTICS))
    if research.estimated_complexity != "low":
        items.append(_item("third-party", ERROR_TRACKING))
    return items


def estimate_confidence(enrichment: InputEnrichment | None) -> str:
    if enrichment is None:
        return "low"
    has_scalability = enrichment.nfr_scalability is not None or bool(enrichment.scalability_tier)
    if has_scalability and enrichment.budget_constraint:
        return "high"
    return "medium"


def development_cost(team: AgentTeam) -> DevelopmentCost:
    hours = team.estimated_total_hours
    return DevelopmentCost(
        total_hours=hours,
        hourly_rate_min=HOURLY_RATE_MIN,
        hourly_rate_max=HOURLY_RATE_MAX,
        total_min=hours * HOURLY_RATE_MIN,
        total_max=hours * HOURLY_RATE_MAX,
    )


def estimate(
    summary: ProjectSummary,
    research: ResearchResult,
    team: AgentTeam,
    enrichment: InputEnrichment | None = None,
) -> CostEstimate:
    """Monthly and annual cost table plus a development cost range."""
    tier = scalability_tier(enrichment)
    items = [
        *hosting_items(tier),
        *database_items(research, tier),
        *storage_items(summary, tier),
        *bandwidth_items(tier),
        *third_party_items(summary, research),
    ]
    result = CostEstimate.from_items(
        items,
        confidence=estimate_confidence(enrichment),
        development_cost=development_cost(team),
        notes=list(ESTIMATE_NOTES),
    )
    logger.info(
        f"Cost estimate for '{summary.project_name}' ({tier} tier): "
        f"${result.total_monthly:g}/mo across {len(items)} items"
    )
    return result
