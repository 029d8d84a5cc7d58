# planforge/llm/factory.py
"""Factory for creating the configured reasoning client."""

import logging

from planforge.config.schema import PlannerConfig

from .client import AnthropicReasoningClient

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "sk-ant-api-key-placeholder"
API_KEY_PREFIX = "sk-ant-"


def is_valid_api_key(api_key: str | None) -> bool:
    """True if the key is present, not the placeholder, and Anthropic-shaped."""
    if not api_key or not api_key.strip():
        return False
    key = api_key.strip()
    return key != PLACEHOLDER_API_KEY and key.startswith(API_KEY_PREFIX)


def create_reasoning_client(config: PlannerConfig) -> AnthropicReasoningClient | None:
    """
    Create a reasoning client when a usable credential is configured.

    Args:
        config: Root PlannerConfig with the API key already resolved

    Returns:
        AnthropicReasoningClient, or None when only local heuristics are available
    """
    settings = config.anthropic
    if not is_valid_api_key(settings.api_key):
        if settings.api_key:
            logger.warning("Configured Anthropic API key is malformed; using local heuristics")
        return None
    return AnthropicReasoningClient(
        api_key=settings.api_key.strip(),
        model=settings.model,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
    )
