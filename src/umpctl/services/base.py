"""BaseService: runs programs on the loop engine for a workspace.

:meth:`BaseService._run` decorates ``perform`` with logging and plugin
observation, binds a run id to every log record, and reports the run to
``post_run`` hooks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from umpctl.config.logging import run_context
from umpctl.runtime.loop import run_sync
from umpctl.runtime.tracing import logged_perform, observed_perform

if TYPE_CHECKING:
    from umpctl.infrastructure.workspace import Workspace
    from umpctl.runtime.program import Program

logger = logging.getLogger(__name__)

InitArg = TypeVar("InitArg")
Output = TypeVar("Output")


@dataclass
class RunRecord:
    """What :meth:`BaseService._run` hands back besides the output."""

    run_id: str
    warnings: list[str] = field(default_factory=list)


class BaseService:
    """Base for service classes.

    Usage::

        class EmailerService(BaseService):
            def send_due(self) -> ServiceResult:
                output, record = self._run(program, settings)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _run(
        self,
        program: Program[InitArg, Any, Any, Any, Output],
        init_arg: InitArg,
    ) -> tuple[Output, RunRecord]:
        """Run *program* to quiescence with logging and plugin hooks attached."""
        with run_context(program.name) as run_id:
            record = RunRecord(run_id=run_id)

            def notify(command: Any, event: Any) -> None:
                self._dispatch_hook(
                    "post_perform",
                    {"program": program.name, "command": command, "event": event},
                    record.warnings,
                )

            observed = program.with_perform(logged_perform).with_perform(
                lambda perform: observed_perform(perform, notify)
            )
            logger.debug("Starting run of %s", program.name)
            output = run_sync(observed, init_arg)
            return output, record

    def _report_run(
        self,
        program_name: str,
        record: RunRecord,
        *,
        ok: bool,
        summary: dict[str, Any],
    ) -> None:
        self._dispatch_hook(
            "post_run",
            {"program": program_name, "run_id": record.run_id, "ok": ok, "summary": summary},
            record.warnings,
        )

    def _dispatch_hook(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook. No-op if plugins are disabled.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        plugins = self._workspace.plugins
        if plugins is None:
            return
        hook_fn = getattr(plugins.hook, hook_name)
        try:
            hook_fn(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            message = f"Plugin hook {hook_name} failed"
            if message not in warnings:
                warnings.append(message)
