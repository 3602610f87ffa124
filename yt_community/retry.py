from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff for page downloads.

    max_attempts includes the first try; the n-th failure waits
    base_delay_seconds * 2**(n-1), capped at max_delay_seconds, then jittered
    by +/- jitter_ratio. A server Retry-After hint raises the wait up to
    retry_after_cap_seconds.
    """

    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 10.0
    jitter_ratio: float = 0.2
    retry_after_cap_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("delays must be >= 0")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")
        if not (0.0 <= self.jitter_ratio <= 1.0):
            raise ValueError("jitter_ratio must be between 0 and 1")

    def backoff_seconds(self, failure_attempt: int) -> float:
        delay = self.base_delay_seconds * (2 ** max(0, failure_attempt - 1))
        return min(self.max_delay_seconds, float(delay))

    def jitter(self, delay: float) -> float:
        if delay <= 0 or self.jitter_ratio <= 0:
            return max(0.0, delay)
        return delay * random.uniform(1.0 - self.jitter_ratio, 1.0 + self.jitter_ratio)

    def cap_retry_after(self, seconds: float | None) -> float | None:
        if seconds is None or seconds < 0:
            return None
        if self.retry_after_cap_seconds > 0:
            return min(float(seconds), self.retry_after_cap_seconds)
        return float(seconds)


@dataclass(frozen=True)
class RetryEvent:
    operation: str
    failure_attempt: int
    max_attempts: int
    delay_seconds: float
    reason: str | None
    error_type: str
    error_message: str
    url: str | None


# (retryable, retry_after_seconds, reason)
IsRetryableFn = Callable[[BaseException], tuple[bool, float | None, str | None]]
OnRetryFn = Callable[[RetryEvent], None]
SleepFn = Callable[[float], None]


def call_with_retries(
    fn: Callable[[], T],
    *,
    policy: RetryPolicy,
    is_retryable: IsRetryableFn,
    operation: str,
    on_retry: OnRetryFn | None = None,
    sleep_fn: SleepFn | None = None,
    url: str | None = None,
) -> T:
    """Call fn(), retrying retryable failures until the policy is exhausted."""
    sleeper = sleep_fn or time.sleep
    attempt = 1

    while True:
        try:
            return fn()
        except Exception as exc:
            retryable, retry_after, reason = is_retryable(exc)
            if not retryable or attempt >= policy.max_attempts:
                raise

            delay = policy.backoff_seconds(attempt)
            hinted = policy.cap_retry_after(retry_after)
            if hinted is not None:
                delay = max(delay, hinted)
            delay = policy.jitter(delay)

            if on_retry is not None:
                on_retry(
                    RetryEvent(
                        operation=operation,
                        failure_attempt=attempt,
                        max_attempts=policy.max_attempts,
                        delay_seconds=delay,
                        reason=reason,
                        error_type=type(exc).__name__,
                        error_message=(str(exc) or "").strip(),
                        url=url,
                    )
                )

            if delay > 0:
                sleeper(delay)
            attempt += 1
