"""Tests for pacing helpers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from member_sync.adapters.pacing import FixedDelayPacer, Pacer, paced


@pytest.fixture
def mock_pacer():
    """Pacer that records waits instead of sleeping."""
    pacer = MagicMock()
    pacer.wait = AsyncMock()
    return pacer


class TestFixedDelayPacer:
    """Tests for FixedDelayPacer."""

    def test_rejects_negative_delay(self):
        """Should refuse a negative delay."""
        with pytest.raises(ValueError, match="delay_seconds"):
            FixedDelayPacer(-1)

    def test_is_a_pacer(self):
        """Should satisfy the Pacer protocol."""
        assert isinstance(FixedDelayPacer(), Pacer)

    @pytest.mark.asyncio
    async def test_wait_sleeps_for_delay(self):
        """Should sleep for the configured number of seconds."""
        with patch(
            "member_sync.adapters.pacing.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            await FixedDelayPacer(1.5).wait()

        mock_sleep.assert_awaited_once_with(1.5)

    @pytest.mark.asyncio
    async def test_wait_is_cancellable(self):
        """Should stop waiting when the task is cancelled."""
        with pytest.raises(TimeoutError):
            async with asyncio.timeout(0.01):
                await FixedDelayPacer(60).wait()


class TestPaced:
    """Tests for the paced async iterator."""

    @pytest.mark.asyncio
    async def test_yields_in_order_and_waits_between(self, mock_pacer):
        """Should wait once between each pair of items."""
        seen = [item async for item in paced(["a", "b", "c"], mock_pacer)]

        assert seen == ["a", "b", "c"]
        assert mock_pacer.wait.await_count == 2

    @pytest.mark.asyncio
    async def test_single_item_never_waits(self, mock_pacer):
        """Should not wait after the only item."""
        seen = [item async for item in paced(["a"], mock_pacer)]

        assert seen == ["a"]
        mock_pacer.wait.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_input(self, mock_pacer):
        """Should yield nothing for an empty iterable."""
        seen = [item async for item in paced([], mock_pacer)]

        assert seen == []
        mock_pacer.wait.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_early_break_skips_wait(self, mock_pacer):
        """Should not wait when the consumer stops after an item."""
        async for item in paced(["a", "b"], mock_pacer):
            assert item == "a"
            break

        mock_pacer.wait.assert_not_awaited()
