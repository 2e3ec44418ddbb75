"""Command group: queue and inspect due notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from umpctl.commands._base import UmpGroup

if TYPE_CHECKING:
    from datetime import datetime

    from umpctl.commands._context import AppContext

_DUE_EXAMPLES = """\
  umpctl due add ann@example.com "<b>Invoice 42</b> is ready"
  umpctl due add bob@example.com "Reminder" --due 2024-05-01
  umpctl due list
  umpctl --json due list --all"""


@click.group(cls=UmpGroup, examples=_DUE_EXAMPLES)
def due() -> None:
    """Queue notifications for the emailer."""


@due.command(
    examples="""\
  umpctl due add ann@example.com "<b>Invoice 42</b> is ready"
  umpctl due add bob@example.com "Reminder" --due 2024-05-01"""
)
@click.argument("email_address")
@click.argument("notification_html")
@click.option(
    "--due",
    "due_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Due date (YYYY-MM-DD). Defaults to today (UTC).",
)
@click.pass_obj
def add(
    app: AppContext,
    email_address: str,
    notification_html: str,
    due_date: datetime | None,
) -> None:
    """Queue NOTIFICATION_HTML for EMAIL_ADDRESS."""
    from umpctl.services.due import DueItemService

    app.emit(
        DueItemService(app.workspace).add(
            email_address,
            notification_html,
            due=due_date.date() if due_date else None,
        )
    )


@due.command("list", examples="  umpctl due list\n  umpctl due list --all")
@click.option("--all", "include_completed", is_flag=True, help="Include completed items.")
@click.pass_obj
def list_cmd(app: AppContext, include_completed: bool) -> None:
    """List queued notifications."""
    from umpctl.services.due import DueItemService

    app.emit(DueItemService(app.workspace).list_items(include_completed=include_completed))
