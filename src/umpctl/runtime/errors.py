"""Exceptions raised by the loop engine.

Domain failures are values (``Err``). These exceptions are reserved for
programming errors: broken ``perform`` contracts and unwrapping failures.
"""

from __future__ import annotations

from typing import Any


class UmpError(Exception):
    """Base class for runtime errors."""


class OutcomeError(UmpError):
    """Raised when an ``Err`` outcome is unwrapped."""


class EffectContractError(UmpError):
    """One or more ``perform`` calls raised instead of resolving to an event.

    Attributes:
        exceptions: The exceptions raised, one per failing command.
        events: Events produced by the commands that did resolve.
    """

    def __init__(
        self,
        message: str,
        exceptions: tuple[BaseException, ...],
        events: tuple[Any, ...],
    ) -> None:
        super().__init__(message)
        self.exceptions = exceptions
        self.events = events
