# planforge/planning/adr/__init__.py
"""Architecture Decision Record generation."""

from .generator import AdrGenerator
from .local import LocalAdrGenerator, architecture_alternatives, architecture_consequences
from .remote import RemoteAdrGenerator, build_adr_prompt, parse_adr_response

__all__ = [
    "AdrGenerator",
    "LocalAdrGenerator",
    "RemoteAdrGenerator",
    "architecture_alternatives",
    "architecture_consequences",
    "build_adr_prompt",
    "parse_adr_response",
]
