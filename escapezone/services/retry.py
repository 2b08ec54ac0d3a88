"""
Rate-limit aware retry for Gemini calls.

Gemini signals quota exhaustion with HTTP 429 / RESOURCE_EXHAUSTED. Those
failures are retried with a strictly exponential backoff (1s, 2s, 4s for the
default policy). Every other failure, and the last rate-limit failure once
the budget is spent, is re-raised unchanged.

There is no jitter, no circuit breaker and no cancellation token: a caller
that goes away does not stop retries already scheduled.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from escapezone.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
SleepFn = Callable[[float], Awaitable[None]]

RATE_LIMIT_STATUS_CODE = 429
RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"


def is_rate_limit_error(error: BaseException) -> bool:
    """
    Check whether an exception is a rate-limit signal.

    Matches google-genai APIError (code=429, status="RESOURCE_EXHAUSTED"),
    HTTP-style errors exposing status/status_code, and any error whose
    message mentions 429 or RESOURCE_EXHAUSTED.
    """
    for attr in ("code", "status", "status_code"):
        value = getattr(error, attr, None)
        if value == RATE_LIMIT_STATUS_CODE or value == RESOURCE_EXHAUSTED:
            return True

    message = str(error)
    return str(RATE_LIMIT_STATUS_CODE) in message or RESOURCE_EXHAUSTED in message


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    retries: int = 3,
    backoff_ms: int = 1000,
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """
    Run an async operation, retrying on rate-limit failures.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        retries: Number of retries after the first attempt
        backoff_ms: Wait before the first retry; doubled after each retry
        sleep: Awaitable delay in seconds (injected by tests)

    Returns:
        The operation's result

    Raises:
        The operation's exception, unchanged, when it is not a rate-limit
        signal or when no retries remain.
    """
    remaining = retries
    delay_ms = backoff_ms

    while True:
        try:
            return await operation()
        except Exception as e:
            if remaining <= 0 or not is_rate_limit_error(e):
                raise
            logger.warning(
                f"Rate limit hit, retrying in {delay_ms}ms... ({remaining} retries left)"
            )
            await sleep(delay_ms / 1000)
            delay_ms *= 2
            remaining -= 1


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget and delay function passed to each orchestration call."""
    retries: int = 3
    backoff_ms: int = 1000
    sleep: SleepFn = field(default=asyncio.sleep, compare=False)

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(retries=settings.RETRY_ATTEMPTS, backoff_ms=settings.RETRY_BACKOFF_MS)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await with_retry(
            operation,
            retries=self.retries,
            backoff_ms=self.backoff_ms,
            sleep=self.sleep,
        )


def get_retry_policy() -> RetryPolicy:
    """FastAPI dependency returning the configured retry policy."""
    return RetryPolicy.from_settings()


# =============================================================================
# ERROR CLASSIFICATION
# =============================================================================

class ErrorKind(str, Enum):
    """The two failure kinds surfaced to the UI."""
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    FAILED = "FAILED"


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception to the UI error kind."""
    if is_rate_limit_error(error):
        return ErrorKind.QUOTA_EXCEEDED
    return ErrorKind.FAILED
