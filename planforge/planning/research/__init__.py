# planforge/planning/research/__init__.py
"""Research stage: remote reasoning or local keyword heuristics."""

from .local import LocalResearcher
from .remote import RemoteResearcher, build_research_prompt, parse_research_response
from .researcher import Researcher

__all__ = [
    "LocalResearcher",
    "RemoteResearcher",
    "Researcher",
    "build_research_prompt",
    "parse_research_response",
]
