"""Retry with capped exponential backoff for async operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

from grok_search.errors import EmptyResponseError, UpstreamError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryObserver = Callable[[int, Exception], None]


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try and how long to wait between attempts.

    Delays are in seconds.  The delay before retry ``i`` is
    ``min(initial_delay * backoff_multiplier ** (i - 1), max_delay)``.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    on_retry: RetryObserver | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")


def backoff_delays(policy: RetryPolicy) -> list[float]:
    """Return the sleep before each retry, in order."""
    delays: list[float] = []
    delay = policy.initial_delay
    for _ in range(policy.max_attempts - 1):
        delays.append(delay)
        delay = min(delay * policy.backoff_multiplier, policy.max_delay)
    return delays


def is_retriable_error(error: BaseException) -> bool:
    """Whether *error* looks transient (timeouts, resets, 429 and 5xx)."""
    if isinstance(error, (httpx.TimeoutException, httpx.TransportError)):
        return True
    if isinstance(error, EmptyResponseError):
        return True
    if isinstance(error, UpstreamError):
        return error.status_code == 429 or error.status_code >= 500
    return False


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
) -> T:
    """Await ``operation()`` until it succeeds or attempts run out.

    The error of the final attempt is re-raised unchanged.  ``on_retry`` is
    called with ``(attempt, error)`` before each sleep.
    """
    policy = policy or RetryPolicy()
    delay = policy.initial_delay
    attempt = 1

    while True:
        try:
            return await operation()
        except Exception as e:
            if attempt >= policy.max_attempts:
                raise
            if policy.on_retry is not None:
                policy.on_retry(attempt, e)
            _logger.debug(
                "Attempt %d/%d failed (%s), sleeping %.1fs",
                attempt, policy.max_attempts, type(e).__name__, delay,
            )
            await asyncio.sleep(delay)
            delay = min(delay * policy.backoff_multiplier, policy.max_delay)
            attempt += 1
