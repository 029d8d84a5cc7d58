# planforge/planning/dual_mode.py
"""
Remote/local strategy selection for dual-mode components.

A component holds a remote strategy (when a client exists) and a local one.
ReasoningPolicy states whether the remote path is tried and whether a remote
failure degrades to the local result or propagates.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from planforge.errors import RemoteReasoningError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReasoningPolicy:
    attempt_remote: bool
    fallback_on_error: bool

    @classmethod
    def fail_fast(cls, remote_available: bool) -> "ReasoningPolicy":
        return cls(attempt_remote=remote_available, fallback_on_error=False)

    @classmethod
    def degrade(cls, remote_available: bool) -> "ReasoningPolicy":
        return cls(attempt_remote=remote_available, fallback_on_error=True)


async def run_with_policy(
    name: str,
    policy: ReasoningPolicy,
    remote: Callable[[], Awaitable[T]] | None,
    local: Callable[[], T],
) -> tuple[T, str]:
    """
    Run the remote strategy under ``policy``, or the local one.

    Returns:
        (result, mode) where mode is "remote" or "local"

    Raises:
        RemoteReasoningError: If the remote path fails and the policy does not fall back
    """
    if not (policy.attempt_remote and remote is not None):
        return local(), "local"

    try:
        result = await remote()
    except RemoteReasoningError as e:
        if not policy.fallback_on_error:
            logger.error(f"{name}: remote reasoning failed: {e}")
            raise
        logger.warning(f"{name}: remote reasoning failed, using local heuristics: {e}")
        return local(), "local"

    return result, "remote"
