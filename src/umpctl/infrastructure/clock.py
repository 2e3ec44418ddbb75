"""Clock capability for delayed commands.

``perform`` implementations call :meth:`sleep_until` to suspend a scheduled
command until its time, then read :meth:`now` for the resulting event.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

import anyio


class Clock(Protocol):
    def now(self) -> datetime: ...

    async def sleep_until(self, at: datetime) -> None: ...


class SystemClock:
    """Wall-clock time; waits with ``anyio.sleep``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    async def sleep_until(self, at: datetime) -> None:
        await anyio.sleep(max(0.0, (at - self.now()).total_seconds()))


class SimulatedClock:
    """Virtual time that jumps forward instead of waiting.

    Never moves backwards. Every requested wake-up is recorded in
    :attr:`wakeups` so callers can inspect the schedule a run produced.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._current = start or datetime(2000, 1, 1, tzinfo=UTC)
        self.wakeups: list[datetime] = []

    def now(self) -> datetime:
        return self._current

    def advance_to(self, target: datetime) -> datetime:
        if target > self._current:
            self._current = target
        return self._current

    async def sleep_until(self, at: datetime) -> None:
        self.wakeups.append(at)
        self.advance_to(at)
        await anyio.sleep(0)
