"""
Retry Manager for upstream API calls.

Provides retry logic with exponential backoff for transient transport
errors. The exporter ships with retries disabled (max_retries=0), so a
refresh performs exactly one exchange unless the operator opts in.
"""

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .config import RetryConfig
from .exceptions import TransportError

T = TypeVar("T")


@dataclass
class RetryResult(Generic[T]):
    """Result of a retry operation."""

    success: bool
    result: Optional[T]
    attempts: int
    last_error: Optional[Exception]


class RetryManager:
    """
    Manages retry logic with exponential backoff.

    Only TransportError is retried by default; decode failures are
    deterministic and repeating the request would not change them.
    """

    def __init__(
        self,
        config: RetryConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the retry manager.

        Args:
            config: Retry configuration with max_retries and delays
            sleep: Function used to wait between attempts
        """
        self._config = config
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        """Total attempts: one initial call plus max_retries."""
        return max(self._config.max_retries, 0) + 1

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate wait time with exponential backoff.

        delay(n) = base_delay * 2^n, capped at max_delay.

        Args:
            attempt: The current attempt number (0-indexed)

        Returns:
            The delay in seconds before the next retry
        """
        delay = self._config.base_delay_seconds * (2 ** attempt)
        return min(delay, self._config.max_delay_seconds)

    def execute_with_retry(
        self,
        operation: Callable[[], T],
        is_retryable: Optional[Callable[[Exception], bool]] = None,
    ) -> RetryResult[T]:
        """
        Execute an operation with retry logic and exponential backoff.

        Args:
            operation: The operation to execute
            is_retryable: Optional predicate deciding whether an exception is
                         retried. Defaults to retrying TransportError only.

        Returns:
            RetryResult containing success status, result, attempts, and last error
        """
        if is_retryable is None:
            is_retryable = lambda e: isinstance(e, TransportError)

        last_error: Optional[Exception] = None
        attempts = 0

        while attempts < self.max_attempts:
            try:
                result = operation()
                return RetryResult(
                    success=True,
                    result=result,
                    attempts=attempts + 1,
                    last_error=None,
                )
            except Exception as e:
                last_error = e
                attempts += 1

                if not is_retryable(e) or attempts >= self.max_attempts:
                    break

                self._sleep(self.calculate_delay(attempts - 1))

        return RetryResult(
            success=False,
            result=None,
            attempts=attempts,
            last_error=last_error,
        )
