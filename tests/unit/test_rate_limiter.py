"""Tests for the fixed-window rate limiter."""

import pytest
from unittest.mock import AsyncMock, patch

from linear_mcp.graphql.rate_limit import FixedWindowRateLimiter


class TestFixedWindowRateLimiter:
    """Test reserve() with an explicit clock."""

    def test_requests_within_limit_do_not_wait(self):
        limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60.0, window_start=0.0)

        assert limiter.reserve(now=1.0) == 0.0
        assert limiter.reserve(now=2.0) == 0.0
        assert limiter.reserve(now=3.0) == 0.0
        assert limiter.count == 3

    def test_overflow_waits_for_next_window(self):
        limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60.0, window_start=0.0)
        limiter.reserve(now=10.0)
        limiter.reserve(now=10.0)

        wait = limiter.reserve(now=10.0)

        assert wait == 50.0
        assert limiter.window_start == 60.0
        assert limiter.count == 1

    def test_window_resets_after_elapsed(self):
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=1.0, window_start=0.0)
        limiter.reserve(now=0.1)

        assert limiter.reserve(now=5.0) == 0.0
        assert limiter.window_start == 5.0
        assert limiter.count == 1

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            FixedWindowRateLimiter(max_requests=0, window_seconds=1.0)
        with pytest.raises(ValueError):
            FixedWindowRateLimiter(max_requests=1, window_seconds=0)


@pytest.mark.asyncio
class TestAcquire:

    @patch("linear_mcp.graphql.rate_limit.asyncio.sleep", new_callable=AsyncMock)
    async def test_acquire_within_limit_does_not_sleep(self, mock_sleep):
        limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=60.0)

        await limiter.acquire()

        mock_sleep.assert_not_awaited()

    @patch("linear_mcp.graphql.rate_limit.asyncio.sleep", new_callable=AsyncMock)
    async def test_acquire_over_limit_sleeps(self, mock_sleep):
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60.0)

        await limiter.acquire()
        await limiter.acquire()

        mock_sleep.assert_awaited_once()
        assert 0 < mock_sleep.await_args.args[0] <= 60.0
