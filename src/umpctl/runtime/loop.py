"""Loop engine: drain events sequentially, fire commands concurrently.

One run repeats two steps until both queues are empty:

1. **Drain**: pop the head event, apply ``update``, append the returned
   commands to the tail of the command queue. Events are applied one at a
   time, in queue order, and never suspend.
2. **Fire**: when no events are left, hand the whole command queue to
   :func:`umpctl.runtime.executor.dispatch`; its events replace the event
   queue and the command queue is cleared.

When both queues are empty the run returns ``output(model)``.

The engine has no clock. A delayed command is an ordinary command whose
``perform`` suspends before resolving. Runs may be unbounded (interactive
programs keep emitting commands), so the cycle is a plain ``while`` loop
with no recursion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

import anyio

from umpctl.runtime.executor import dispatch
from umpctl.runtime.program import RunState, describe

if TYPE_CHECKING:
    from umpctl.runtime.program import Program

logger = logging.getLogger(__name__)

InitArg = TypeVar("InitArg")
Model = TypeVar("Model")
Command = TypeVar("Command")
Event = TypeVar("Event")
Output = TypeVar("Output")


def start(
    program: Program[InitArg, Model, Command, Event, Output],
    init_arg: InitArg,
) -> RunState[Model, Command, Event]:
    """Call ``init`` once and build the initial run state (no events)."""
    model, commands = program.init(init_arg)
    return RunState(model=model, commands=list(commands), events=[])


def drain_one(
    program: Program[InitArg, Model, Command, Event, Output],
    state: RunState[Model, Command, Event],
) -> RunState[Model, Command, Event]:
    """Apply ``update`` to the head event of *state*, updating it in place.

    Pops from the left of the event queue and extends the command queue,
    so draining a batch of N events is linear in N.
    """
    event = state.events.popleft()
    state.model, new_commands = program.update(event, state.model)
    state.commands.extend(new_commands)
    logger.debug(
        "%s: drained %s, %d new commands",
        program.name,
        describe(event),
        len(new_commands),
    )
    return state


async def fire(
    program: Program[InitArg, Model, Command, Event, Output],
    state: RunState[Model, Command, Event],
) -> RunState[Model, Command, Event]:
    """Perform every pending command and queue the resulting events."""
    logger.debug("%s: firing %d commands", program.name, len(state.commands))
    events = await dispatch(state.commands, program.perform)
    return RunState(model=state.model, commands=[], events=events)


async def run(
    program: Program[InitArg, Model, Command, Event, Output],
    init_arg: InitArg,
) -> Output:
    """Run *program* from ``init(init_arg)`` until quiescent.

    Returns ``output`` of the final model. Raises
    :class:`~umpctl.runtime.errors.EffectContractError` if a ``perform``
    call raises instead of returning an event.
    """
    state = start(program, init_arg)
    cycles = 0

    while not state.is_quiescent:
        if state.events:
            state = drain_one(program, state)
        else:
            cycles += 1
            state = await fire(program, state)

    logger.debug("%s: quiescent after %d cycles", program.name, cycles)
    return program.output(state.model)


def run_sync(
    program: Program[InitArg, Model, Command, Event, Output],
    init_arg: InitArg,
) -> Output:
    """Blocking entry point: drive :func:`run` on a fresh event loop."""
    return anyio.run(run, program, init_arg)
