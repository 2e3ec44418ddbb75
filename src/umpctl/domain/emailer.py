"""Email batching workflow: pure ``init`` and ``update`` for the loop engine.

Due notifications are grouped by recipient into one email each, then
chunked into batches of at most ``send_limit_per_second`` emails. One batch
is sent per ``TimeToSend`` tick; after a batch is sent and marked, the next
tick is scheduled ``resend_interval_seconds`` later.

Transitions (any ``Err`` event fails the model and emits nothing)::

    DueItemsLoaded(Ok items)      batch items             -> TriggerSendNow
    TimeToSend(now), no batches   record now              -> (none)
    TimeToSend(now), batch ready  pop batch, set to_mark  -> SendEmail per email
    EmailBatchSent(Ok ids)        to_mark -= ids          -> MarkCompleted(ids)
    BatchMarked(Ok)               to_mark empty, batches left, nothing scheduled
                                                          -> ScheduleSend(now + interval)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta

from umpctl.runtime.outcome import Err, Ok

BULLET = "&bull;"
LINE_BREAK = "<br>"

# --- Types ---


@dataclass(frozen=True)
class EmailerSettings:
    """Per-run settings for the workflow."""

    send_from: str
    subject_template: str
    send_limit_per_second: int
    today: date
    resend_interval_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.send_limit_per_second < 1:
            msg = f"send_limit_per_second must be >= 1, got {self.send_limit_per_second}"
            raise ValueError(msg)


@dataclass(frozen=True)
class DueItem:
    """A notification waiting to be emailed."""

    item_id: int
    email_address: str
    notification_html: str


@dataclass(frozen=True)
class Email:
    """An outgoing email and the due item ids it completes."""

    sender: str
    recipient: str
    subject: str
    body: str
    completed: tuple[int, ...]


Batch = tuple[Email, ...]


# --- Commands ---


@dataclass(frozen=True)
class FindDueItems:
    as_of: date


@dataclass(frozen=True)
class TriggerSendNow:
    pass


@dataclass(frozen=True)
class ScheduleSend:
    at: datetime


@dataclass(frozen=True)
class SendEmail:
    email: Email


@dataclass(frozen=True)
class MarkCompleted:
    item_ids: tuple[int, ...]


Command = FindDueItems | TriggerSendNow | ScheduleSend | SendEmail | MarkCompleted


# --- Events ---


@dataclass(frozen=True)
class DueItemsLoaded:
    result: Ok[list[DueItem]] | Err[str]


@dataclass(frozen=True)
class TimeToSend:
    now: datetime


@dataclass(frozen=True)
class EmailBatchSent:
    result: Ok[list[int]] | Err[str]


@dataclass(frozen=True)
class BatchMarked:
    result: Ok[None] | Err[str]


Event = DueItemsLoaded | TimeToSend | EmailBatchSent | BatchMarked


# --- Model ---


@dataclass(frozen=True)
class WorkflowState:
    """Workflow model.

    ``emails_sent`` and ``delivered`` only accumulate, so events of one
    concurrent batch may be applied in any order.
    """

    settings: EmailerSettings
    current_time: datetime = datetime.min.replace(tzinfo=UTC)
    to_send: tuple[Batch, ...] = ()
    to_mark: frozenset[int] = frozenset()
    send_scheduled: bool = False
    emails_sent: int = 0
    delivered: frozenset[int] = field(default_factory=frozenset)


Model = Ok[WorkflowState] | Err[str]


# --- Batching ---


def to_email(settings: EmailerSettings, email_address: str, items: list[DueItem]) -> Email:
    """Render one recipient's due items as a single email."""
    return Email(
        sender=settings.send_from,
        recipient=email_address,
        subject=settings.subject_template,
        body=LINE_BREAK.join(BULLET + item.notification_html for item in items),
        completed=tuple(item.item_id for item in items),
    )


def group_by_recipient(items: list[DueItem]) -> dict[str, list[DueItem]]:
    """Group items by address, keeping first-seen recipient and item order."""
    groups: dict[str, list[DueItem]] = {}
    for item in items:
        groups.setdefault(item.email_address, []).append(item)
    return groups


def chunk(emails: list[Email], size: int) -> tuple[Batch, ...]:
    """Split *emails* into consecutive batches of at most *size*."""
    return tuple(tuple(emails[i : i + size]) for i in range(0, len(emails), size))


def batch(settings: EmailerSettings, items: list[DueItem]) -> tuple[Batch, ...]:
    """Turn due items into rate-limited batches of emails."""
    emails = [
        to_email(settings, address, grouped)
        for address, grouped in group_by_recipient(items).items()
    ]
    return chunk(emails, settings.send_limit_per_second)


# --- Program functions ---


def init(settings: EmailerSettings) -> tuple[Model, list[Command]]:
    """Start with an empty schedule and ask for today's due items."""
    return Ok(WorkflowState(settings=settings)), [FindDueItems(settings.today)]


def update(event: Event, state: WorkflowState) -> tuple[Model, list[Command]]:
    """Apply one event to an unfailed workflow state."""
    match event:
        case DueItemsLoaded(result=Ok(value=items)):
            return Ok(replace(state, to_send=batch(state.settings, items))), [TriggerSendNow()]

        case TimeToSend(now=now):
            ticked = replace(state, current_time=now, send_scheduled=False)
            if not ticked.to_send:
                return Ok(ticked), []
            head, *remaining = ticked.to_send
            to_mark = frozenset(item_id for email in head for item_id in email.completed)
            return (
                Ok(replace(ticked, to_send=tuple(remaining), to_mark=to_mark)),
                [SendEmail(email) for email in head],
            )

        case EmailBatchSent(result=Ok(value=item_ids)):
            sent = frozenset(item_ids)
            return (
                Ok(
                    replace(
                        state,
                        to_mark=state.to_mark - sent,
                        emails_sent=state.emails_sent + 1,
                        delivered=state.delivered | sent,
                    )
                ),
                [MarkCompleted(tuple(item_ids))],
            )

        case BatchMarked(result=Ok()):
            if state.to_mark or not state.to_send or state.send_scheduled:
                return Ok(state), []
            next_send = state.current_time + timedelta(
                seconds=state.settings.resend_interval_seconds
            )
            return Ok(replace(state, send_scheduled=True)), [ScheduleSend(next_send)]

        case DueItemsLoaded(result=Err(error=error)):
            return Err(f"loading due items failed: {error}"), []

        case EmailBatchSent(result=Err(error=error)):
            return Err(f"sending email failed: {error}"), []

        case BatchMarked(result=Err(error=error)):
            return Err(f"marking items completed failed: {error}"), []

    msg = f"Unknown emailer event: {event!r}"
    raise TypeError(msg)


def output(model: Model) -> Model:
    """The final model is the run's output."""
    return model
