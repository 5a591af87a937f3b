"""
Unit tests for the opt-in retry policy.
"""

import pytest

from shared.retry import RetryConfig, RetryError, calculate_delay, call_with_retry, retry_on_exception


class TestCalculateDelay:
    """Test cases for backoff delay calculation."""

    def test_exponential(self):
        """Test exponential backoff."""
        config = RetryConfig(base_delay=1.0, jitter=False)
        assert [calculate_delay(a, config) for a in (1, 2, 3)] == [1.0, 2.0, 4.0]

    def test_linear_and_fixed(self):
        """Test linear and fixed backoff."""
        assert calculate_delay(3, RetryConfig(base_delay=0.5, jitter=False, backoff_strategy="linear")) == 1.5
        assert calculate_delay(3, RetryConfig(base_delay=0.5, jitter=False, backoff_strategy="fixed")) == 0.5

    def test_capped_by_max_delay(self):
        """Test delay cap."""
        config = RetryConfig(base_delay=10.0, max_delay=15.0, jitter=False)
        assert calculate_delay(4, config) == 15.0

    def test_jitter_stays_within_ten_percent(self):
        """Test jitter bounds."""
        config = RetryConfig(base_delay=1.0, jitter=True)
        for _ in range(20):
            assert 0.9 <= calculate_delay(1, config) <= 1.1

    def test_rejects_zero_attempts(self):
        """Test zero attempts is rejected."""
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=0)


class TestCallWithRetry:
    """Test cases for call_with_retry."""

    @pytest.mark.asyncio
    async def test_only_listed_exceptions_are_retried(self):
        """Test only listed exceptions are retried."""
        calls = []

        async def boom():
            calls.append(1)
            raise KeyError("not retried")

        with pytest.raises(KeyError):
            await call_with_retry(boom, (ValueError,), RetryConfig(max_attempts=3, base_delay=0.0))
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_sleeps_between_attempts(self):
        """Test sleep between attempts."""
        delays = []
        attempts = []

        async def fake_sleep(delay):
            delays.append(delay)

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise ValueError("flaky")
            return "ok"

        config = RetryConfig(max_attempts=3, base_delay=1.0, jitter=False)
        assert await call_with_retry(flaky, (ValueError,), config, sleep=fake_sleep) == "ok"
        assert delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_decorator(self):
        """Test retry decorator."""
        attempts = []

        @retry_on_exception((ValueError,), RetryConfig(max_attempts=2, base_delay=0.0))
        async def always_fails(x):
            attempts.append(x)
            raise ValueError("nope")

        with pytest.raises(RetryError) as exc_info:
            await always_fails(7)
        assert attempts == [7, 7]
        assert exc_info.value.attempts == 2
        assert always_fails.__name__ == "always_fails"
