"""Tests for retry_with_backoff and RetryPolicy."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from grok_search.errors import ConfigError, EmptyResponseError, UpstreamError
from grok_search.llm.retry import (
    RetryPolicy,
    backoff_delays,
    is_retriable_error,
    retry_with_backoff,
)


def _flaky(failures: int, value: str = "ok"):
    """Coroutine factory that fails *failures* times, then returns *value*."""
    calls: list[int] = []

    async def operation() -> str:
        calls.append(len(calls) + 1)
        if len(calls) <= failures:
            raise RuntimeError(f"failure {len(calls)}")
        return value

    return operation, calls


class TestRetryWithBackoff:
    async def test_success_first_try_no_sleep(self):
        operation, calls = _flaky(0)
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await retry_with_backoff(operation, RetryPolicy())
        assert result == "ok"
        assert calls == [1]
        sleep.assert_not_called()

    async def test_success_on_third_attempt(self):
        operation, calls = _flaky(2)
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await retry_with_backoff(operation, RetryPolicy(max_attempts=5))
        assert result == "ok"
        assert len(calls) == 3
        # One sleep per failure, none after the success
        assert [c.args[0] for c in sleep.call_args_list] == [1.0, 2.0]

    async def test_always_failing_called_max_attempts_times(self):
        operation, calls = _flaky(100)
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(RuntimeError, match="failure 4"):
                await retry_with_backoff(operation, RetryPolicy(max_attempts=4))
        assert len(calls) == 4

    async def test_last_error_is_raised_unchanged(self):
        errors = [ValueError("first"), KeyError("second"), UpstreamError(503, "busy")]

        async def operation():
            raise errors.pop(0)

        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(UpstreamError) as exc_info:
                await retry_with_backoff(operation, RetryPolicy(max_attempts=3))
        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "busy"

    async def test_single_attempt_means_no_retry(self):
        operation, calls = _flaky(1)
        observer_calls: list[int] = []
        policy = RetryPolicy(max_attempts=1, on_retry=lambda a, e: observer_calls.append(a))
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(RuntimeError):
                await retry_with_backoff(operation, policy)
        assert calls == [1]
        assert observer_calls == []
        sleep.assert_not_called()

    async def test_observer_called_before_each_retry(self):
        operation, _ = _flaky(100)
        seen: list[tuple[int, str]] = []
        policy = RetryPolicy(
            max_attempts=3, on_retry=lambda attempt, err: seen.append((attempt, str(err))),
        )
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(RuntimeError):
                await retry_with_backoff(operation, policy)
        assert seen == [(1, "failure 1"), (2, "failure 2")]

    async def test_delays_capped_at_max_delay(self):
        operation, _ = _flaky(100)
        policy = RetryPolicy(
            max_attempts=6, initial_delay=1.0, max_delay=10.0, backoff_multiplier=3.0,
        )
        with patch("grok_search.llm.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(RuntimeError):
                await retry_with_backoff(operation, policy)
        assert [c.args[0] for c in sleep.call_args_list] == [1.0, 3.0, 9.0, 10.0, 10.0]


class TestBackoffDelays:
    def test_default_policy(self):
        assert backoff_delays(RetryPolicy()) == [1.0, 2.0]

    def test_formula(self):
        policy = RetryPolicy(
            max_attempts=6, initial_delay=0.5, max_delay=5.0, backoff_multiplier=2.0,
        )
        expected = [min(0.5 * 2.0 ** (i - 1), 5.0) for i in range(1, 6)]
        assert backoff_delays(policy) == expected

    def test_constant_delay_with_multiplier_one(self):
        policy = RetryPolicy(max_attempts=4, initial_delay=2.0, backoff_multiplier=1.0)
        assert backoff_delays(policy) == [2.0, 2.0, 2.0]


class TestRetryPolicyValidation:
    def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_multiplier_below_one_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(backoff_multiplier=0.5)

    def test_policy_is_frozen(self):
        policy = RetryPolicy()
        with pytest.raises(AttributeError):
            policy.max_attempts = 10  # type: ignore[misc]


class TestIsRetriableError:
    def test_transport_errors(self):
        assert is_retriable_error(httpx.ReadTimeout("timed out"))
        assert is_retriable_error(httpx.ConnectError("reset"))
        assert is_retriable_error(EmptyResponseError())

    def test_statuses(self):
        assert is_retriable_error(UpstreamError(429, ""))
        assert is_retriable_error(UpstreamError(500, ""))
        assert is_retriable_error(UpstreamError(503, ""))
        assert not is_retriable_error(UpstreamError(401, ""))
        assert not is_retriable_error(UpstreamError(404, ""))

    def test_other_errors(self):
        assert not is_retriable_error(ConfigError("no key"))
        assert not is_retriable_error(ValueError("x"))
