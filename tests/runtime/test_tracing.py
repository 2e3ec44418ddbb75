"""Tests for the perform decorators."""

from __future__ import annotations

import pytest

from umpctl.runtime.tracing import logged_perform, observed_perform


class _RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, dict]] = []

    def debug(self, event: str, **kw) -> None:
        self.records.append((event, kw))


async def _double(command: int) -> int:
    return command * 2


class TestLoggedPerform:
    @pytest.mark.asyncio
    async def test_logs_command_and_result(self):
        log = _RecordingLogger()
        perform = logged_perform(_double, logger=log)

        assert await perform(4) == 8
        assert log.records == [
            ("command", {"command": "4"}),
            ("result", {"result": "8"}),
        ]

    @pytest.mark.asyncio
    async def test_default_logger(self):
        assert await logged_perform(_double)(1) == 2


class TestObservedPerform:
    @pytest.mark.asyncio
    async def test_observer_sees_each_pair(self):
        seen = []
        perform = observed_perform(_double, lambda c, e: seen.append((c, e)))

        await perform(1)
        await perform(3)
        assert seen == [(1, 2), (3, 6)]


class TestLoggedRun:
    def test_logged_program_runs_to_completion(self):
        from umpctl.runtime.loop import run_sync
        from umpctl.runtime.program import Program

        program = Program(
            init=lambda arg: (0, [arg]),
            update=lambda event, model: (model + event, []),
            perform=_double,
            output=lambda model: model,
        ).with_perform(logged_perform)

        assert run_sync(program, 5) == 10
