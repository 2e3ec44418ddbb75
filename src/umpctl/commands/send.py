"""Command: run the emailer once."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from umpctl.commands._base import UmpCommand

if TYPE_CHECKING:
    from datetime import datetime

    from umpctl.commands._context import AppContext

_SEND_EXAMPLES = """\
  umpctl send
  umpctl send --date 2024-05-01
  umpctl --json send --simulate"""


@click.command(cls=UmpCommand, examples=_SEND_EXAMPLES)
@click.option(
    "--date",
    "as_of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Send items due on or before this date (YYYY-MM-DD). Defaults to today (UTC).",
)
@click.option(
    "--simulate",
    is_flag=True,
    help="Do not wait between batches (simulated clock).",
)
@click.pass_obj
def send(app: AppContext, as_of: datetime | None, simulate: bool) -> None:
    """Email every due notification, grouped per recipient and rate limited."""
    from umpctl.services.emailer import EmailerService

    app.emit(
        EmailerService(app.workspace).send_due(
            as_of=as_of.date() if as_of else None,
            simulate=simulate,
        )
    )
