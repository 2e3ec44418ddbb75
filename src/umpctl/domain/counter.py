"""Decrement-counter workflow: load a stored count, subtract, save.

A minimal request/response program. Every failure becomes an ``Err``
model carrying a :class:`CounterError`; the service layer maps its kind to
an error code.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from umpctl.runtime.outcome import Err, Ok


class CounterErrorKind(StrEnum):
    """Ways a decrement can fail."""

    INVALID_INPUT = "INVALID_INPUT"
    LOAD_FAILED = "LOAD_FAILED"
    NOT_FOUND = "NOT_FOUND"
    WOULD_GO_NEGATIVE = "WOULD_GO_NEGATIVE"
    SAVE_FAILED = "SAVE_FAILED"


@dataclass(frozen=True)
class CounterError:
    kind: CounterErrorKind
    message: str = ""


@dataclass(frozen=True)
class DecrementRequest:
    counter_id: str
    amount: int


@dataclass(frozen=True)
class LoadState:
    counter_id: str


@dataclass(frozen=True)
class SaveState:
    counter_id: str
    count: int


Command = LoadState | SaveState


@dataclass(frozen=True)
class StateLoaded:
    result: Ok[int | None] | Err[str]


@dataclass(frozen=True)
class StateSaved:
    result: Ok[None] | Err[str]


Event = StateLoaded | StateSaved


@dataclass(frozen=True)
class CounterModel:
    request: DecrementRequest
    count: int | None = None


Model = Ok[CounterModel] | Err[CounterError]


def init(request: DecrementRequest) -> tuple[Model, list[Command]]:
    """Validate the request and load the counter."""
    if request.amount < 0:
        error = CounterError(CounterErrorKind.INVALID_INPUT, "amount must be >= 0")
        return Err(error), []
    return Ok(CounterModel(request=request)), [LoadState(request.counter_id)]


def update(event: Event, model: CounterModel) -> tuple[Model, list[Command]]:
    match event:
        case StateLoaded(result=Err(error=message)):
            return Err(CounterError(CounterErrorKind.LOAD_FAILED, message)), []

        case StateLoaded(result=Ok(value=None)):
            counter_id = model.request.counter_id
            return Err(CounterError(CounterErrorKind.NOT_FOUND, counter_id)), []

        case StateLoaded(result=Ok(value=old_count)):
            count = old_count - model.request.amount
            if count < 0:
                message = f"{old_count} - {model.request.amount} < 0"
                return Err(CounterError(CounterErrorKind.WOULD_GO_NEGATIVE, message)), []
            return (
                Ok(replace(model, count=count)),
                [SaveState(model.request.counter_id, count)],
            )

        case StateSaved(result=Err(error=message)):
            return Err(CounterError(CounterErrorKind.SAVE_FAILED, message)), []

        case StateSaved(result=Ok()):
            return Ok(model), []

    msg = f"Unknown counter event: {event!r}"
    raise TypeError(msg)


def output(model: Model) -> Ok[int | None] | Err[CounterError]:
    """Project the final model to the saved count (or the failure)."""
    return model.map(lambda m: m.count)
