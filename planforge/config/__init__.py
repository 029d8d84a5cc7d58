# planforge/config/__init__.py
"""Configuration models and loader."""

from .loader import get_config_path, load_config, resolve_api_key
from .schema import (
    AdrConfig,
    AnthropicConfig,
    OutputConfig,
    PlannerConfig,
    QualityConfig,
    ResearchConfig,
)

__all__ = [
    "AdrConfig",
    "AnthropicConfig",
    "OutputConfig",
    "PlannerConfig",
    "QualityConfig",
    "ResearchConfig",
    "get_config_path",
    "load_config",
    "resolve_api_key",
]
