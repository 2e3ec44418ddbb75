"""Command group: stored counters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from umpctl.commands._base import UmpGroup

if TYPE_CHECKING:
    from umpctl.commands._context import AppContext

_COUNTER_EXAMPLES = """\
  umpctl counter set credits 10
  umpctl counter decrement credits 3
  umpctl --json counter decrement credits 20"""


@click.group(cls=UmpGroup, examples=_COUNTER_EXAMPLES)
def counter() -> None:
    """Set and decrement stored counters."""


@counter.command("set", examples="  umpctl counter set credits 10")
@click.argument("counter_id")
@click.argument("value", type=int)
@click.pass_obj
def set_cmd(app: AppContext, counter_id: str, value: int) -> None:
    """Set COUNTER_ID to VALUE, creating it if needed."""
    from umpctl.services.counter import CounterService

    app.emit(CounterService(app.workspace).set_value(counter_id, value))


@counter.command(examples="  umpctl counter decrement credits 3")
@click.argument("counter_id")
@click.argument("amount", type=int)
@click.pass_obj
def decrement(app: AppContext, counter_id: str, amount: int) -> None:
    """Subtract AMOUNT from COUNTER_ID; fails rather than going below zero."""
    from umpctl.services.counter import CounterService

    app.emit(CounterService(app.workspace).decrement(counter_id, amount))
