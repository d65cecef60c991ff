"""Unit tests for sessionfold.utils.retry module."""

from unittest.mock import AsyncMock, patch

import pytest

from sessionfold.utils.retry import retry_with_backoff


class TestRetryWithBackoff:
    """Tests for retry_with_backoff function."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")
        assert await retry_with_backoff(func, 2, 1.0, 10.0, "a", key="b") == "ok"
        func.assert_awaited_once_with("a", key="b")

    @pytest.mark.asyncio
    async def test_recovers_after_failure(self):
        func = AsyncMock(side_effect=[ValueError("bad"), "ok"])
        with patch("sessionfold.utils.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            assert await retry_with_backoff(func, max_retries=2, base_delay=0.5) == "ok"
        sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_exponential_delays_are_capped(self):
        func = AsyncMock(side_effect=RuntimeError("down"))
        with patch("sessionfold.utils.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(RuntimeError, match="down"):
                await retry_with_backoff(func, max_retries=4, base_delay=1.0, max_delay=3.0)

        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 3.0, 3.0]
        assert func.await_count == 5

    @pytest.mark.asyncio
    async def test_no_sleep_after_last_attempt(self):
        func = AsyncMock(side_effect=RuntimeError("down"))
        with patch("sessionfold.utils.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(RuntimeError):
                await retry_with_backoff(func, max_retries=0)
        sleep.assert_not_awaited()
