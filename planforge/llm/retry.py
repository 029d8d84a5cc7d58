# planforge/llm/retry.py
"""Retry logic for Anthropic API calls with exponential backoff."""

import logging

import anthropic
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = {408, 429, 500, 502, 503, 504, 529}


def is_retryable(exception: BaseException) -> bool:
    """
    Returns True if the exception should be retried.

    Retryable conditions:
    - APIConnectionError (network failure), except timeouts
    - APIStatusError with a transient status (rate limit, overload, 5xx)

    Timeouts are final: the configured timeout bounds the whole call.
    """
    if isinstance(exception, anthropic.APITimeoutError):
        return False

    if isinstance(exception, anthropic.APIConnectionError):
        return True

    if isinstance(exception, anthropic.APIStatusError):
        return exception.status_code in RETRYABLE_STATUSES

    return False


def build_retry(max_attempts: int = 3, wait_min: float = 4, wait_max: float = 60):
    """Tenacity decorator for remote reasoning calls; the last error is re-raised."""
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=wait_min, max=wait_max),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

