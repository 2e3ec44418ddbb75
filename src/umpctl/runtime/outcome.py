"""Outcome: success/failure container threaded through a run.

A program's model is wrapped in :class:`Ok` or :class:`Err`. Once a
transition yields ``Err``, :func:`bind_update` turns every later update
into a pass-through so the failed model is never touched again, while
events from commands already in flight are still drained.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from umpctl.runtime.errors import OutcomeError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
EventT = TypeVar("EventT")
CommandT = TypeVar("CommandT")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error`` (any value describing the failure)."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def unwrap(self) -> Any:
        msg = f"Called unwrap on Err: {self.error!r}"
        raise OutcomeError(msg)

    def unwrap_or(self, default: U) -> U:
        return default


Outcome = Ok[T] | Err[Any]


def bind_update(
    update: Callable[[EventT, T], tuple[Ok[T] | Err[Any], list[CommandT]]],
) -> Callable[[EventT, Ok[T] | Err[Any]], tuple[Ok[T] | Err[Any], list[CommandT]]]:
    """Lift *update* over an outcome-wrapped model.

    ``Ok`` models are unwrapped and passed to *update*. ``Err`` models are
    returned as-is with no commands, whatever the event.
    """

    def bound(event: EventT, outcome: Ok[T] | Err[Any]) -> tuple[Ok[T] | Err[Any], list[CommandT]]:
        if isinstance(outcome, Ok):
            return update(event, outcome.value)
        return outcome, []

    return bound
