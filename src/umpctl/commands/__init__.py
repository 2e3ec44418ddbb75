"""Subcommand modules for umpctl.

Provides register_commands(), which imports each command module only when
the root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every command and command group to the root CLI group."""
    from umpctl.commands.counter import counter
    from umpctl.commands.due import due

    cli.add_command(due)
    cli.add_command(counter)

    from umpctl.commands.init_cmd import init_cmd
    from umpctl.commands.send import send

    cli.add_command(init_cmd)
    cli.add_command(send)
