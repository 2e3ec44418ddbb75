"""Tests for the system and simulated clocks."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from umpctl.infrastructure.clock import SimulatedClock, SystemClock

START = datetime(2024, 5, 1, tzinfo=UTC)


class TestSimulatedClock:
    def test_default_start(self):
        assert SimulatedClock().now() == datetime(2000, 1, 1, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_sleep_jumps_forward_and_records(self):
        clock = SimulatedClock(START)
        await clock.sleep_until(START + timedelta(seconds=5))
        assert clock.now() == START + timedelta(seconds=5)
        assert clock.wakeups == [START + timedelta(seconds=5)]

    def test_never_moves_backwards(self):
        clock = SimulatedClock(START)
        assert clock.advance_to(START - timedelta(days=1)) == START


class TestSystemClock:
    def test_now_is_aware(self):
        assert SystemClock().now().tzinfo is not None

    @pytest.mark.asyncio
    async def test_past_deadline_returns_immediately(self):
        clock = SystemClock()
        before = clock.now()
        await clock.sleep_until(before - timedelta(hours=1))
        assert clock.now() - before < timedelta(seconds=1)
