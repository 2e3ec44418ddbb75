"""Human/JSON rendering of ServiceResult.

Human output is rendered with Rich into a string buffer so the
``format_result() -> str`` contract holds; colors are dropped outside a TTY.
"""

from __future__ import annotations

import json
from io import StringIO
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

if TYPE_CHECKING:
    from umpctl.services.result import ServiceResult

UMP_THEME = Theme(
    {
        "ump.ok": "bold green",
        "ump.error": "bold red",
        "ump.op": "bold cyan",
        "ump.key": "dim",
    }
)


class OutputSettings(BaseModel):
    """How the CLI wants results rendered."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _create_console(width: int = 120) -> Console:
    return Console(
        file=StringIO(), theme=UMP_THEME, highlight=False, width=width, soft_wrap=True
    )


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return escape(json.dumps(value, separators=(",", ":")))
    return escape(str(value))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode dumps the whole result. Quiet mode prints only ``OK: op`` or
    the error line. Verbose mode appends ``meta``.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = _create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "ERROR"
        console.print(f"[ump.error]ERROR[/]: [ump.op]{result.op}[/] ({code}) {escape(message)}")
    else:
        console.print(f"[ump.ok]OK[/]: [ump.op]{result.op}[/]")
        if not settings.quiet:
            for key, value in result.data.items():
                console.print(f"  [ump.key]{key}[/]: {_format_value(value)}")
    if settings.verbose and result.meta:
        for key, value in result.meta.items():
            console.print(f"  [ump.key]meta.{key}[/]: {_format_value(value)}")

    assert isinstance(console.file, StringIO)
    return console.file.getvalue().rstrip("\n")
