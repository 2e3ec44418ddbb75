"""Perform decorators that log or observe every effect.

Decorating ``perform`` keeps the engine free of logging concerns::

    program = program.with_perform(logged_perform)
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

Command = TypeVar("Command")
Event = TypeVar("Event")


def logged_perform(
    perform: Callable[[Command], Awaitable[Event]],
    *,
    logger: Any = None,
) -> Callable[[Command], Awaitable[Event]]:
    """Log each command before it runs and the event it resolves to."""
    log = logger if logger is not None else structlog.get_logger("umpctl.runtime.tracing")

    @functools.wraps(perform)
    async def wrapper(command: Command) -> Event:
        log.debug("command", command=repr(command))
        event = await perform(command)
        log.debug("result", result=repr(event))
        return event

    return wrapper


def observed_perform(
    perform: Callable[[Command], Awaitable[Event]],
    observer: Callable[[Command, Event], None],
) -> Callable[[Command], Awaitable[Event]]:
    """Call ``observer(command, event)`` after each command resolves."""

    @functools.wraps(perform)
    async def wrapper(command: Command) -> Event:
        event = await perform(command)
        observer(command, event)
        return event

    return wrapper
