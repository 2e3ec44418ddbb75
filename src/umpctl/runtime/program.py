"""Program contract and run state for the loop engine.

A :class:`Program` bundles the four caller-supplied functions::

    init(init_arg)         -> (model, [command])
    update(event, model)   -> (model, [command])      pure, never blocks
    perform(command)       -> event                   async, always resolves
    output(model)          -> output                  pure projection

The engine treats ``model``, ``command``, ``event`` and ``output`` as opaque.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

InitArg = TypeVar("InitArg")
Model = TypeVar("Model")
Command = TypeVar("Command")
Event = TypeVar("Event")
Output = TypeVar("Output")

Perform = Callable[[Command], Awaitable[Event]]


@dataclass(frozen=True)
class Program(Generic[InitArg, Model, Command, Event, Output]):
    """The four-function contract driven by :func:`umpctl.runtime.loop.run`."""

    init: Callable[[InitArg], tuple[Model, list[Command]]]
    update: Callable[[Event, Model], tuple[Model, list[Command]]]
    perform: Perform[Command, Event]
    output: Callable[[Model], Output]
    name: str = "program"

    def with_perform(
        self,
        wrapper: Callable[[Perform[Command, Event]], Perform[Command, Event]],
    ) -> Program[InitArg, Model, Command, Event, Output]:
        """Return a copy whose ``perform`` is ``wrapper(self.perform)``."""
        return replace(self, perform=wrapper(self.perform))


@dataclass
class RunState(Generic[Model, Command, Event]):
    """Working set of a run: the model plus both pending queues.

    Both queues are deques; sequences passed in are copied into new ones.
    """

    model: Model
    commands: deque[Command] = field(default_factory=deque)
    events: deque[Event] = field(default_factory=deque)

    def __post_init__(self) -> None:
        self.commands = deque(self.commands)
        self.events = deque(self.events)

    @property
    def is_quiescent(self) -> bool:
        """True when nothing is left to drain or fire."""
        return not self.commands and not self.events


def fold_events(
    init: Callable[[InitArg], tuple[Model, list[Command]]],
    update: Callable[[Event, Model], tuple[Model, list[Command]]],
    init_arg: InitArg,
    events: Iterable[Event],
) -> tuple[Model, list[Command]]:
    """Fold *events* through *update*, starting from ``init(init_arg)``.

    Meant for tests of pure workflows: no command is performed. The
    returned commands are those emitted by the last step only (the init
    commands when *events* is empty).
    """
    model, commands = init(init_arg)
    for event in events:
        model, commands = update(event, model)
    return model, commands


def describe(value: Any) -> str:
    """Short type-qualified label for logging opaque commands and events."""
    return type(value).__name__
