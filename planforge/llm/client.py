# planforge/llm/client.py
"""Anthropic reasoning client used by the dual-mode pipeline components."""

import logging

import anthropic
import httpx

from planforge.errors import MalformedResponseError, RemoteReasoningError

from .retry import build_retry

logger = logging.getLogger(__name__)


class AnthropicReasoningClient:
    """
    Async client for single-shot structured reasoning calls.

    Every SDK or transport failure surfaces as RemoteReasoningError so
    callers apply their own re-raise or fallback policy.
    """

    SYSTEM_PROMPT = (
        "You are a senior software architect and technical planner. "
        "Answer with specific, concrete recommendations and return exactly the "
        "JSON structure requested."
    )

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 120.0,
        max_retries: int = 3,
        retry_wait_min: float = 4,
    ):
        """
        Initialize Anthropic reasoning client.

        Args:
            api_key: Anthropic API key
            model: Model used for every call
            timeout: Per-request timeout in seconds
            max_retries: Attempts for transient errors (rate limit, 5xx, connection)
            retry_wait_min: Minimum backoff between attempts in seconds
        """
        self._api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: anthropic.AsyncAnthropic | None = None
        self._create = build_retry(max_retries, wait_min=retry_wait_min)(self._create_message)

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        """Lazy-loaded Anthropic client (SDK retries disabled, tenacity owns them)."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=httpx.Timeout(self.timeout),
                max_retries=0,
            )
        return self._client

    async def _create_message(self, prompt: str, max_tokens: int, system: str):
        return await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )

    async def generate(
        self, prompt: str, max_tokens: int = 4000, system: str | None = None
    ) -> str:
        """
        Send one prompt and return the response text.

        Raises:
            RemoteReasoningError: On API, network or timeout failure
            MalformedResponseError: If the response carries no text
        """
        logger.info(f"Calling {self.model} (max_tokens={max_tokens}, prompt={len(prompt)} chars)")
        try:
            response = await self._create(prompt, max_tokens, system or self.SYSTEM_PROMPT)
        except (anthropic.APIError, httpx.HTTPError) as e:
            raise RemoteReasoningError(f"Remote reasoning call failed: {e}") from e

        text = getattr(response.content[0], "text", "") if response.content else ""
        if not text:
            raise MalformedResponseError("Remote reasoning returned an empty response")

        logger.info(f"Received {len(text)} chars from {self.model}")
        return text

    async def close(self):
        """Close the async client if initialized."""
        if self._client is not None:
            await self._client.close()
            self._client = None
