"""Command: workspace initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from umpctl.commands._base import UmpCommand
from umpctl.config.discovery import CONFIG_FILENAME
from umpctl.config.models import DEFAULT_TOML
from umpctl.infrastructure.database.engine import DB_FILENAME, WORKSPACE_DIR, init_database
from umpctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from umpctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  umpctl init
  umpctl init /srv/notifications
  umpctl --json init ."""


@click.command("init", cls=UmpCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.pass_obj
def init_cmd(app: AppContext, path: str) -> None:
    """Create the workspace database and a default umpctl.toml."""
    root = Path(path).resolve()
    op = "init_workspace"
    try:
        root.mkdir(parents=True, exist_ok=True)
        engine = init_database(root)
        engine.dispose()
    except OSError as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INIT_FAILED", message=str(exc)),
            )
        )
        return

    config_file = root / CONFIG_FILENAME
    created_config = not config_file.exists()
    if created_config:
        config_file.write_text(DEFAULT_TOML, encoding="utf-8")

    app.emit(
        ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(root),
                "database": str(root / WORKSPACE_DIR / DB_FILENAME),
                "config": str(config_file),
                "created_config": created_config,
            },
        )
    )
