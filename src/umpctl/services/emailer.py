"""EmailerService: send today's due notifications at a bounded rate.

The workflow in :mod:`umpctl.domain.emailer` decides; this module performs.
:func:`make_perform` maps each command to exactly one collaborator call
and one event. Blocking repository calls run on worker threads so the
emails of a batch are delivered concurrently.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Protocol

from anyio import to_thread

from umpctl.domain import emailer
from umpctl.domain.emailer import (
    BatchMarked,
    DueItem,
    DueItemsLoaded,
    Email,
    EmailBatchSent,
    EmailerSettings,
    FindDueItems,
    MarkCompleted,
    ScheduleSend,
    SendEmail,
    TimeToSend,
    TriggerSendNow,
)
from umpctl.infrastructure.clock import Clock, SimulatedClock, SystemClock
from umpctl.runtime.outcome import Err, Ok, bind_update
from umpctl.runtime.program import Program
from umpctl.services._helpers import today_utc
from umpctl.services.base import BaseService
from umpctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from umpctl.config.models import EmailerConfig


class DueItemSource(Protocol):
    def load_due(self, as_of: date) -> Ok[list[DueItem]] | Err[str]: ...


class EmailTransport(Protocol):
    def send(self, email: Email) -> Ok[list[int]] | Err[str]: ...


class CompletionStore(Protocol):
    def mark_completed(self, item_ids: Sequence[int]) -> Ok[None] | Err[str]: ...


@dataclass(frozen=True)
class EmailerEffects:
    """Collaborators the email workflow's commands are performed against."""

    source: DueItemSource
    transport: EmailTransport
    store: CompletionStore
    clock: Clock


def make_perform(
    effects: EmailerEffects,
) -> Callable[[emailer.Command], Awaitable[emailer.Event]]:
    """Bind *effects* into the workflow's ``perform`` function."""

    async def perform(command: emailer.Command) -> emailer.Event:
        match command:
            case FindDueItems(as_of=as_of):
                result = await to_thread.run_sync(effects.source.load_due, as_of)
                return DueItemsLoaded(result)

            case TriggerSendNow():
                return TimeToSend(effects.clock.now())

            case ScheduleSend(at=at):
                await effects.clock.sleep_until(at)
                return TimeToSend(effects.clock.now())

            case SendEmail(email=email):
                return EmailBatchSent(await to_thread.run_sync(effects.transport.send, email))

            case MarkCompleted(item_ids=item_ids):
                result = await to_thread.run_sync(effects.store.mark_completed, item_ids)
                return BatchMarked(result)

        msg = f"Unknown emailer command: {command!r}"
        raise TypeError(msg)

    return perform


def build_program(
    effects: EmailerEffects,
) -> Program[EmailerSettings, emailer.Model, emailer.Command, emailer.Event, emailer.Model]:
    """The email workflow as a loop-engine program."""
    return Program(
        init=emailer.init,
        update=bind_update(emailer.update),
        perform=make_perform(effects),
        output=emailer.output,
        name="emailer",
    )


def settings_from_config(config: EmailerConfig, today: date) -> EmailerSettings:
    return EmailerSettings(
        send_from=config.send_from,
        subject_template=config.subject_template,
        send_limit_per_second=config.send_limit_per_second,
        today=today,
        resend_interval_seconds=config.resend_interval_seconds,
    )


class EmailerService(BaseService):
    """Run the email workflow against the workspace database."""

    def send_due(
        self,
        *,
        as_of: date | None = None,
        simulate: bool = False,
        clock: Clock | None = None,
    ) -> ServiceResult:
        """Email every item due on or before *as_of* (default: today, UTC).

        With *simulate*, rescheduled batches do not wait for real time.
        """
        op = "send_due"
        run_date = as_of or today_utc()
        settings = settings_from_config(self._workspace.settings.emailer, run_date)
        effects = EmailerEffects(
            source=self._workspace.due_items,
            transport=self._workspace.outbox,
            store=self._workspace.due_items,
            clock=clock or (SimulatedClock() if simulate else SystemClock()),
        )
        program = build_program(effects)

        final, record = self._run(program, settings)
        meta = {"run_id": record.run_id, "program": program.name}

        if isinstance(final, Err):
            self._report_run(program.name, record, ok=False, summary={"error": final.error})
            return ServiceResult(
                ok=False,
                op=op,
                warnings=record.warnings,
                error=ServiceError(
                    code="RUN_FAILED",
                    message=str(final.error),
                    detail={"as_of": run_date.isoformat()},
                ),
                meta=meta,
            )

        state = final.value
        data = {
            "as_of": run_date.isoformat(),
            "emails_sent": state.emails_sent,
            "items_completed": sorted(state.delivered),
            "simulated": simulate,
        }
        self._report_run(program.name, record, ok=True, summary=data)
        return ServiceResult(ok=True, op=op, data=data, warnings=record.warnings, meta=meta)
