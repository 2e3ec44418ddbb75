"""CounterService: decrement and set stored counters."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from anyio import to_thread

from umpctl.domain import counter
from umpctl.domain.counter import DecrementRequest, LoadState, SaveState, StateLoaded, StateSaved
from umpctl.infrastructure.repositories import CounterRepository
from umpctl.runtime.outcome import Err, bind_update
from umpctl.runtime.program import Program
from umpctl.services.base import BaseService
from umpctl.services.result import ServiceError, ServiceResult


def make_perform(
    repository: CounterRepository,
) -> Callable[[counter.Command], Awaitable[counter.Event]]:
    async def perform(command: counter.Command) -> counter.Event:
        match command:
            case LoadState(counter_id=counter_id):
                return StateLoaded(await to_thread.run_sync(repository.load, counter_id))
            case SaveState(counter_id=counter_id, count=count):
                return StateSaved(await to_thread.run_sync(repository.save, counter_id, count))

        msg = f"Unknown counter command: {command!r}"
        raise TypeError(msg)

    return perform


def build_program(repository: CounterRepository) -> Program:
    return Program(
        init=counter.init,
        update=bind_update(counter.update),
        perform=make_perform(repository),
        output=counter.output,
        name="counter",
    )


class CounterService(BaseService):
    def decrement(self, counter_id: str, amount: int) -> ServiceResult:
        """Subtract *amount* from a stored counter, refusing to go below zero."""
        op = "decrement_counter"
        program = build_program(self._workspace.counters)
        result, record = self._run(program, DecrementRequest(counter_id, amount))

        if isinstance(result, Err):
            error: counter.CounterError = result.error
            self._report_run(program.name, record, ok=False, summary={"error": str(error.kind)})
            return ServiceResult(
                ok=False,
                op=op,
                warnings=record.warnings,
                error=ServiceError(
                    code=str(error.kind),
                    message=error.message or str(error.kind),
                    detail={"counter_id": counter_id, "amount": amount},
                ),
                meta={"run_id": record.run_id},
            )

        data = {"counter_id": counter_id, "count": result.value}
        self._report_run(program.name, record, ok=True, summary=data)
        return ServiceResult(
            ok=True, op=op, data=data, warnings=record.warnings, meta={"run_id": record.run_id}
        )

    def set_value(self, counter_id: str, value: int) -> ServiceResult:
        """Create or overwrite a counter (outside the loop engine)."""
        op = "set_counter"
        if value < 0:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message="value must be >= 0"),
            )
        saved = self._workspace.counters.save(counter_id, value)
        if isinstance(saved, Err):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="SAVE_FAILED", message=saved.error),
            )
        return ServiceResult(ok=True, op=op, data={"counter_id": counter_id, "count": value})
