"""Effect executor: concurrent fan-out of commands, join-all fan-in.

Every command is launched at once in an anyio task group. Events are
collected in completion order; callers must not rely on any ordering
between events of the same batch.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import anyio

from umpctl.runtime.errors import EffectContractError

logger = logging.getLogger(__name__)

Command = TypeVar("Command")
Event = TypeVar("Event")


async def dispatch(
    commands: Sequence[Command],
    perform: Callable[[Command], Awaitable[Event]],
) -> list[Event]:
    """Perform every command concurrently and return all resulting events.

    No partial results are returned and one command never cancels another.
    A ``perform`` that raises breaks the contract (failures must be encoded
    in the event); the other commands still run to completion, then
    :class:`EffectContractError` is raised.
    """
    if not commands:
        return []

    events: list[Event] = []
    failures: list[BaseException] = []

    async def run_one(command: Command) -> None:
        try:
            event = await perform(command)
        except Exception as exc:
            logger.error("perform raised for %s: %s", type(command).__name__, exc)
            failures.append(exc)
        else:
            events.append(event)

    async with anyio.create_task_group() as tg:
        for command in commands:
            tg.start_soon(run_one, command)

    if failures:
        msg = f"{len(failures)} of {len(commands)} commands raised instead of returning an event"
        raise EffectContractError(msg, tuple(failures), tuple(events))

    return events
