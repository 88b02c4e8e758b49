"""
Property-based tests for the Retry Manager module.

Uses Hypothesis for property-based testing of backoff delays and attempt
counting.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from synergy_wholesale_exporter.config import RetryConfig
from synergy_wholesale_exporter.exceptions import MalformedResponseError, TransportError
from synergy_wholesale_exporter.retry_manager import RetryManager


@st.composite
def retry_config_strategy(draw) -> RetryConfig:
    """Generate valid RetryConfig objects."""
    return RetryConfig(
        max_retries=draw(st.integers(min_value=0, max_value=5)),
        base_delay_seconds=draw(st.floats(min_value=0.001, max_value=2.0)),
        max_delay_seconds=draw(st.floats(min_value=2.0, max_value=60.0)),
    )


class FailingOperation:
    """Operation failing a fixed number of times before succeeding."""

    def __init__(self, failures: int, error: Exception) -> None:
        self._failures = failures
        self._error = error
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self._failures:
            raise self._error
        return "ok"


def transport_error() -> TransportError:
    return TransportError(code="timeout", message="Request timed out")


class TestExponentialBackoffProperty:
    """Delays double per attempt and are capped at max_delay."""

    @given(config=retry_config_strategy(), attempt=st.integers(min_value=0, max_value=10))
    @settings(max_examples=100)
    def test_delay_calculation(self, config: RetryConfig, attempt: int) -> None:
        manager = RetryManager(config)

        delay = manager.calculate_delay(attempt)

        assert delay == min(config.base_delay_seconds * (2 ** attempt), config.max_delay_seconds)
        assert delay <= config.max_delay_seconds

    @given(config=retry_config_strategy())
    @settings(max_examples=100)
    def test_sleeps_follow_backoff(self, config: RetryConfig) -> None:
        sleeps: list[float] = []
        manager = RetryManager(config, sleep=sleeps.append)
        operation = FailingOperation(failures=100, error=transport_error())

        result = manager.execute_with_retry(operation)

        assert not result.success
        assert result.attempts == config.max_retries + 1
        assert sleeps == [manager.calculate_delay(n) for n in range(config.max_retries)]


class TestAttemptProperty:
    """Attempts stop at the first success or the first non-retryable error."""

    @given(config=retry_config_strategy(), failures=st.integers(min_value=0, max_value=6))
    @settings(max_examples=100)
    def test_success_within_budget(self, config: RetryConfig, failures: int) -> None:
        manager = RetryManager(config, sleep=lambda _: None)
        operation = FailingOperation(failures=failures, error=transport_error())

        result = manager.execute_with_retry(operation)

        if failures <= config.max_retries:
            assert result.success
            assert result.result == "ok"
            assert result.attempts == failures + 1
        else:
            assert not result.success
            assert isinstance(result.last_error, TransportError)
            assert operation.calls == config.max_retries + 1

    def test_protocol_errors_not_retried(self) -> None:
        manager = RetryManager(RetryConfig(max_retries=5), sleep=lambda _: None)
        operation = FailingOperation(
            failures=10,
            error=MalformedResponseError(code="not_xml", message="bad"),
        )

        result = manager.execute_with_retry(operation)

        assert not result.success
        assert operation.calls == 1

    def test_default_config_makes_one_attempt(self) -> None:
        manager = RetryManager(RetryConfig(), sleep=lambda _: None)
        operation = FailingOperation(failures=1, error=transport_error())

        result = manager.execute_with_retry(operation)

        assert not result.success
        assert operation.calls == 1
