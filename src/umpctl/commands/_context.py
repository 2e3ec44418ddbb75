"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the workspace lazily and owns result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from umpctl.config.logging import configure_logging
from umpctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from umpctl.config.settings import UmpSettings
    from umpctl.infrastructure.workspace import Workspace
    from umpctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: UmpSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from umpctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit with code 1 when it failed.

        Warnings go to stderr in human mode so piped output stays clean.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        self.close()
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
