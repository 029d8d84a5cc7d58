# planforge/planning/rules.py
"""
Keyword rule tables used by the local heuristics.

Every inference that classifies free text by keywords (feature priority,
complexity, effort, implied features, project complexity score) is an
ordered table of rules here, so each table can be inspected and tested on
its own.

Keyword semantics: text is lowercased; keywords of three letters or fewer
("ai", "ml", "ui", "api", "go", "vue") must start a word, longer keywords
match anywhere as substrings.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

Predicate = Callable[[str, int], bool]

_SHORT_KEYWORD = 3


def has_keyword(text: str, keyword: str) -> bool:
    """True if keyword occurs in text under the module's matching rules."""
    text = text.lower()
    keyword = keyword.lower()
    if len(keyword) <= _SHORT_KEYWORD and keyword.isalpha():
        return re.search(rf"(?<![a-z0-9]){re.escape(keyword)}", text) is not None
    return keyword in text


def has_any(text: str, keywords: Iterable[str]) -> bool:
    return any(has_keyword(text, kw) for kw in keywords)


def keywords(*words: str) -> Predicate:
    """Predicate matching any of the words, ignoring position."""
    return lambda text, _position: has_any(text, words)


def position_below(limit: int) -> Predicate:
    """Predicate matching items listed before index ``limit``."""
    return lambda _text, position: position < limit


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A predicate over (text, position) and the result it yields."""

    when: Predicate
    result: T
    label: str = ""

    def matches(self, text: str, position: int = 0) -> bool:
        return self.when(text, position)


@dataclass(frozen=True)
class RuleTable(Generic[T]):
    """Ordered rules evaluated first-match-wins, with a default."""

    rules: tuple[Rule[T], ...]
    default: T

    def first_match(self, text: str, position: int = 0) -> Rule[T] | None:
        return next((r for r in self.rules if r.matches(text, position)), None)

    def evaluate(self, text: str, position: int = 0) -> T:
        rule = self.first_match(text, position)
        return rule.result if rule else self.default


# Feature priority (explicit features, position is the index in the input list)
PRIORITY_RULES: RuleTable[str] = RuleTable(
    rules=(
        Rule(keywords("auth", "security", "login"), "critical", "security-sensitive"),
        Rule(keywords("core", "essential"), "critical", "core capability"),
        Rule(position_below(2), "high", "listed first"),
        Rule(keywords("crud", "database", "api"), "high", "data or API work"),
        Rule(keywords("ui", "interface", "display"), "medium", "presentation"),
        Rule(keywords("optional", "future", "analytics"), "low", "deferrable"),
    ),
    default="medium",
)

FEATURE_COMPLEXITY_RULES: RuleTable[str] = RuleTable(
    rules=(
        Rule(keywords("real-time", "realtime", "websocket", "streaming"), "high", "real-time"),
        Rule(keywords("ai", "ml", "machine learning"), "high", "machine learning"),
        Rule(keywords("payment", "billing"), "high", "payments"),
        Rule(keywords("display", "view", "show"), "low", "read-only"),
        Rule(keywords("simple", "basic"), "low", "stated as simple"),
    ),
    default="medium",
)

BASE_HOURS = {"high": 24.0, "medium": 16.0, "low": 8.0}

# Applied in order after the complexity base; each rule rewrites the running total
HOUR_ADJUSTMENTS: tuple[Rule[Callable[[float], float]], ...] = (
    Rule(keywords("auth"), lambda _h: 16.0, "auth flat rate"),
    Rule(keywords("crud"), lambda _h: 12.0, "crud flat rate"),
    Rule(keywords("ui", "interface"), lambda h: h + 8, "ui work"),
    Rule(keywords("test"), lambda h: h + 4, "test work"),
)


def estimate_feature_hours(name: str, complexity: str) -> float:
    hours = BASE_HOURS[complexity]
    for rule in HOUR_ADJUSTMENTS:
        if rule.matches(name):
            hours = rule.result(hours)
    return hours


@dataclass(frozen=True)
class ImpliedFeature:
    """A feature added when the description triggers it and no feature covers it."""

    name: str
    priority: str
    complexity: str
    estimated_hours: float
    triggers: tuple[str, ...]
    covered_by: tuple[str, ...] = field(default_factory=tuple)

    def triggered_by(self, description: str) -> bool:
        return has_any(description, self.triggers)

    def covered(self, feature_names: Iterable[str]) -> bool:
        return any(c in name.lower() for name in feature_names for c in self.covered_by)


IMPLIED_FEATURES: tuple[ImpliedFeature, ...] = (
    ImpliedFeature(
        name="User Authentication & Authorization",
        priority="critical",
        complexity="medium",
        estimated_hours=16,
        triggers=("user", "login", "auth"),
        covered_by=("auth",),
    ),
    ImpliedFeature(
        name="Data Persistence Layer",
        priority="critical",
        complexity="medium",
        estimated_hours=12,
        triggers=("store", "save", "data"),
        covered_by=("database", "storage"),
    ),
    ImpliedFeature(
        name="RESTful API Endpoints",
        priority="high",
        complexity="medium",
        estimated_hours=20,
        triggers=("api", "backend"),
        covered_by=("api",),
    ),
)

# Project complexity score: (keywords, points); each rule counts once
DESCRIPTION_OR_FEATURE_SCORE: tuple[Rule[int], ...] = (
    Rule(keywords("real-time", "realtime"), 2, "real-time"),
    Rule(keywords("auth"), 1, "authentication"),
)
DESCRIPTION_ONLY_SCORE: tuple[Rule[int], ...] = (
    Rule(keywords("ai", "ml"), 2, "machine learning"),
    Rule(keywords("payment", "billing"), 1, "payments"),
)

COMPLEXITY_BUCKETS: tuple[tuple[int, str], ...] = ((4, "high"), (2, "medium"))


def feature_count_points(count: int) -> int:
    if count > 10:
        return 2
    if count > 5:
        return 1
    return 0


def _leading_number(text: str) -> int | None:
    match = re.search(r"\d+", text)
    return int(match.group()) if match else None


def timeline_points(timeline: str | None) -> int:
    """One point for a stated timeline over 12 weeks or over 3 months."""
    if not timeline:
        return 0
    lower = timeline.lower()
    amount = _leading_number(lower)
    if amount is None:
        return 0
    if "week" in lower and amount > 12:
        return 1
    if "month" in lower and amount > 3:
        return 1
    return 0


def complexity_score(
    description: str, features: list[str], timeline: str | None = None
) -> int:
    feature_text = " ".join(features)
    score = feature_count_points(len(features))
    for rule in DESCRIPTION_OR_FEATURE_SCORE:
        if rule.matches(description) or rule.matches(feature_text):
            score += rule.result
    for rule in DESCRIPTION_ONLY_SCORE:
        if rule.matches(description):
            score += rule.result
    return score + timeline_points(timeline)


def complexity_bucket(score: int) -> str:
    for threshold, bucket in COMPLEXITY_BUCKETS:
        if score >= threshold:
            return bucket
    return "low"


# Shared feature detectors used by downstream stages
AUTH_KEYWORDS = ("auth", "login")
REALTIME_KEYWORDS = ("real-time", "realtime", "websocket")
DATA_KEYWORDS = ("data", "database", "storage", "crud")


def any_feature_matches(names: Iterable[str], words: Iterable[str]) -> bool:
    words = tuple(words)
    return any(has_any(name, words) for name in names)


def team_size_number(team_size: str | None) -> int:
    """Parse a head count from free text ("3 devs", "solo"); defaults to 1."""
    if not team_size:
        return 1
    if "solo" in team_size.lower():
        return 1
    amount = _leading_number(team_size)
    return max(amount, 1) if amount is not None else 1


def is_solo_team(team_size: str | None) -> bool:
    if not team_size:
        return False
    return "solo" in team_size.lower() or _leading_number(team_size) == 1
