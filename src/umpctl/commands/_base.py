"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints a block of sample
invocations for the command and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _attach_examples(cmd: click.Command, examples: str) -> None:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show,
            help="Show usage examples.",
        )
    )


class UmpCommand(click.Command):
    """Command accepting an ``examples=`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)


class UmpGroup(click.Group):
    """Group accepting an ``examples=`` keyword.

    Subcommands declared with ``@group.command`` are :class:`UmpCommand`
    instances, so they take ``examples=`` too.
    """

    command_class = UmpCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)
