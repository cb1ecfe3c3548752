"""
Retry policy configuration.

The policy is part of the client configuration so callers can drive their
own retry loops from it (together with ``ServiceError.retryable``). The
request paths in this package issue each request exactly once.
"""

from __future__ import annotations

import random

from pydantic import BaseModel


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Implements exponential backoff with optional jitter. The delay for
    attempt N is: min(base_delay * (exponential_base ** N), max_delay) + jitter

    Attributes:
        max_attempts: Maximum number of attempts (including initial).
        base_delay: Initial delay in seconds between retries.
        max_delay: Maximum delay in seconds (caps backoff).
        exponential_base: Base for exponential backoff calculation.
        jitter: Whether to add random jitter to delays.
        retry_on_status: HTTP status codes that are worth retrying.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    retry_on_status: tuple[int, ...] = (429, 502, 503, 504)

    model_config = {"frozen": True}

    @classmethod
    def from_retries(cls, max_retries: int, retry_delay: float) -> "RetryPolicy":
        """Build a policy from a retry count and a base delay.

        Args:
            max_retries: Retries after the first attempt.
            retry_delay: Base delay in seconds.

        Returns:
            A policy allowing ``max_retries + 1`` attempts.
        """
        return cls(max_attempts=max_retries + 1, base_delay=retry_delay)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for a given attempt number.

        Args:
            attempt: The attempt number (0-indexed).

        Returns:
            Delay in seconds before the next retry.
        """
        delay = self.base_delay * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay)

        if self.jitter:
            # Add up to 25% jitter
            delay += delay * 0.25 * random.random()

        return delay

    def should_retry_status(self, status_code: int) -> bool:
        """Check if a status code is in ``retry_on_status``."""
        return status_code in self.retry_on_status


DEFAULT_RETRY_POLICY = RetryPolicy()
