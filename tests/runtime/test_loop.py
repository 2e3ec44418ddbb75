"""Tests for the drain/fire loop engine."""

from __future__ import annotations

import time
from dataclasses import dataclass

import anyio
import pytest

from umpctl.runtime.errors import EffectContractError
from umpctl.runtime.loop import drain_one, fire, run, run_sync, start
from umpctl.runtime.program import Program, RunState


def _program(init, update, perform, output=lambda m: m):
    return Program(init=init, update=update, perform=perform, output=output, name="test")


async def _never(command):
    raise AssertionError(f"unexpected command {command!r}")


class TestStartAndDrain:
    def test_start_calls_init_once(self):
        calls = []

        def init(arg):
            calls.append(arg)
            return "model", ["c1", "c2"]

        state = start(_program(init, None, _never), "arg")
        assert calls == ["arg"]
        assert state == RunState(model="model", commands=["c1", "c2"], events=[])

    def test_drain_pops_head_and_appends_commands(self):
        def update(event, model):
            return model + [event], [f"cmd-{event}"]

        program = _program(None, update, _never)
        state = RunState(model=[], commands=["old"], events=["e1", "e2"])
        state = drain_one(program, state)
        assert state.model == ["e1"]
        assert list(state.commands) == ["old", "cmd-e1"]
        assert list(state.events) == ["e2"]

    @pytest.mark.asyncio
    async def test_fire_replaces_events_and_clears_commands(self):
        async def perform(command):
            return command.upper()

        program = _program(None, None, perform)
        state = await fire(program, RunState(model=0, commands=["a"], events=[]))
        assert state == RunState(model=0, commands=[], events=["A"])


class TestRun:
    def test_terminates_immediately_without_commands(self):
        program = _program(lambda arg: (arg, []), None, _never, output=lambda m: m * 2)
        assert run_sync(program, 21) == 42

    def test_events_drained_in_order_before_firing(self):
        trace = []

        def init(_):
            return [], ["x", "y"]

        def update(event, model):
            trace.append(("update", event))
            return model + [event], []

        async def perform(command):
            trace.append(("perform", command))
            return command

        result = run_sync(_program(init, update, perform), None)
        assert sorted(result) == ["x", "y"]
        performs = [i for i, step in enumerate(trace) if step[0] == "perform"]
        updates = [i for i, step in enumerate(trace) if step[0] == "update"]
        assert max(performs) < min(updates)

    def test_update_sees_fifo_order_within_a_batch(self):
        @dataclass(frozen=True)
        class Tick:
            n: int

        def init(_):
            return [], [Tick(1)]

        def update(event, model):
            if event.n < 5:
                return model + [event.n], [Tick(event.n + 1)]
            return model + [event.n], []

        async def perform(command):
            return command

        assert run_sync(_program(init, update, perform), None) == [1, 2, 3, 4, 5]

    def test_many_cycles_without_recursion(self):
        def init(_):
            return 0, ["tick"]

        def update(event, count):
            count += 1
            return count, ["tick"] if count < 5000 else []

        async def perform(command):
            return command

        assert run_sync(_program(init, update, perform), None) == 5000

    def test_delayed_command_is_just_a_slow_perform(self):
        def init(_):
            return [], ["later", "now"]

        def update(event, model):
            return model + [event], []

        async def perform(command):
            if command == "later":
                await anyio.sleep(0.05)
            return command

        assert run_sync(_program(init, update, perform), None) == ["now", "later"]

    def test_contract_violation_propagates(self):
        def init(_):
            return None, ["boom"]

        async def perform(command):
            raise ValueError("bad perform")

        with pytest.raises(EffectContractError):
            run_sync(_program(init, None, perform), None)

    @pytest.mark.asyncio
    async def test_async_entry_point(self):
        async def perform(command):
            return 1

        def update(event, model):
            return model + event, []

        program = _program(lambda arg: (arg, ["inc"]), update, perform)
        assert await run(program, 1) == 2


class TestLargeFanOut:
    def test_drain_reuses_queues(self):
        def update(event, model):
            return model + 1, [event]

        program = _program(None, update, _never)
        state = RunState(model=0, events=["a", "b"])
        commands, events = state.commands, state.events

        drained = drain_one(program, state)
        assert drained is state
        assert drained.commands is commands
        assert drained.events is events

    def test_draining_a_large_batch_is_linear(self):
        def update(event, model):
            return model + 1, [event]

        program = _program(None, update, _never)
        state = RunState(model=0, events=range(50_000))

        started = time.perf_counter()
        while state.events:
            state = drain_one(program, state)
        elapsed = time.perf_counter() - started

        assert state.model == 50_000
        assert len(state.commands) == 50_000
        assert elapsed < 2.0

    def test_large_fan_out_run(self):
        def init(_):
            return 0, list(range(20_000))

        def update(event, count):
            return count + 1, []

        async def perform(command):
            return command

        assert run_sync(_program(init, update, perform), None) == 20_000
