"""Retry helpers for transient source-fetch failures.

Updates:
  v0.2.0 - 2026-09-24 - Bundle backoff parameters into RetryPolicy for fetchers.
  v0.1.0 - 2026-09-17 - Add async exponential backoff retry helper.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import httpx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

_RETRYABLE_HTTP_STATUS_CODES = {408, 429}


def is_retryable_http_status(status_code: int) -> bool:
    """Return ``True`` when *status_code* suggests a transient failure."""
    return status_code in _RETRYABLE_HTTP_STATUS_CODES or 500 <= status_code < 600


def is_retryable_httpx_error(exc: Exception) -> bool:
    """Return ``True`` when *exc* represents a transient httpx error."""
    if isinstance(exc, httpx.HTTPStatusError):
        return is_retryable_http_status(exc.response.status_code)
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Exponential backoff parameters.

    Attributes:
      max_attempts: Total attempts including the first call.
      base_delay_seconds: Base backoff delay for the second attempt.
      max_delay_seconds: Cap for exponential backoff.
      jitter_fraction: Random jitter added as a fraction of the computed delay.
    """

    max_attempts: int = 3
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 4.0
    jitter_fraction: float = 0.1

    def delay_for(self, attempt: int) -> float:
        """Return the sleep before retrying after failed *attempt* (1-based)."""
        delay = min(self.max_delay_seconds, self.base_delay_seconds * (2 ** (attempt - 1)))
        if self.jitter_fraction <= 0:
            return delay
        return delay + (delay * self.jitter_fraction * random.random())


async def async_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    should_retry: Callable[[Exception], bool],
) -> T:
    """Execute *operation* with exponential-backoff retries.

    Args:
      operation: Zero-argument coroutine factory to execute.
      policy: Backoff parameters; defaults to :class:`RetryPolicy`.
      should_retry: Predicate that decides whether an exception is retryable.

    Returns:
      The value returned by *operation* on success.

    Raises:
      Exception: Re-raises the last exception when retries are exhausted or non-retryable.
    """
    policy = policy or RetryPolicy()
    attempts = max(1, int(policy.max_attempts))
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt >= attempts or not should_retry(exc):
                raise
            if policy.base_delay_seconds <= 0:
                continue
            await asyncio.sleep(policy.delay_for(attempt))
    raise RuntimeError("async_retry exhausted retries")  # pragma: no cover


__all__ = [
    "RetryPolicy",
    "async_retry",
    "is_retryable_http_status",
    "is_retryable_httpx_error",
]
