# planforge/llm/__init__.py
"""Remote reasoning client and credential checks."""

from .client import AnthropicReasoningClient
from .factory import create_reasoning_client, is_valid_api_key
from .retry import build_retry, is_retryable

__all__ = [
    "AnthropicReasoningClient",
    "build_retry",
    "create_reasoning_client",
    "is_retryable",
    "is_valid_api_key",
]
