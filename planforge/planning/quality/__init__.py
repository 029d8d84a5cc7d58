# planforge/planning/quality/__init__.py
"""
Quality scoring for assembled build specs.

Section completeness, vague-language detection and the pass/fail gate.
"""

from .validator import VAGUE_TERMS, QualityValidator, split_sections, validate

__all__ = ["QualityValidator", "VAGUE_TERMS", "split_sections", "validate"]
