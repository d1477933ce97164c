"""Retry logic with exponential backoff."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from agent_sdk.config import RetryPolicy
from agent_sdk.errors import ProviderError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def calculate_delay(attempt: int, policy: RetryPolicy) -> float:
    """Compute the delay before retrying after the given 0-based attempt.

    Uses exponential backoff clamped to *policy.max_delay*.
    """
    return min(policy.base_delay * (2 ** attempt), policy.max_delay)


async def with_retry(fn: Callable[[], Awaitable[T]], policy: RetryPolicy) -> T:
    """Await *fn*, retrying retryable provider errors according to *policy*.

    At least one attempt is always made. Non-retryable provider errors and
    any other exception propagate immediately.
    """
    attempts = max(1, policy.max_attempts)

    for attempt in range(attempts):
        try:
            return await fn()
        except ProviderError as exc:
            if not exc.retryable or attempt >= attempts - 1:
                raise

            delay = calculate_delay(attempt, policy)
            logger.warning(
                "Provider call failed (attempt %d/%d), retrying in %.2fs: %s",
                attempt + 1, attempts, delay, exc,
            )
            if policy.on_retry is not None:
                policy.on_retry(attempt, exc, delay)

            await asyncio.sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover
