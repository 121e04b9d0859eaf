"""Retry policy for read-only remote subscription calls."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry logic with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (including initial attempt)
        retry_status_codes: HTTP status codes that should trigger a retry
        backoff_factor: Base delay; attempt n waits backoff_factor * 2**n
        max_backoff: Maximum backoff delay in seconds
        retry_exceptions: Exception types that should trigger a retry
    """

    max_attempts: int = 3
    retry_status_codes: frozenset[int] = field(
        default_factory=lambda: frozenset({500, 502, 503, 504})
    )
    backoff_factor: float = 0.25
    max_backoff: float = 2.0
    retry_exceptions: tuple[type[Exception], ...] = (httpx.TransportError,)

    def delay(self, attempt: int) -> float:
        """Backoff before the retry that follows zero-based attempt."""
        return min(self.backoff_factor * (2**attempt), self.max_backoff)


NO_RETRY = RetryConfig(max_attempts=1)
