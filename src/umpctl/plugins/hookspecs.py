"""Pluggy hook specifications for umpctl run events.

Hooks are called synchronously from the loop's fire step (``post_perform``)
and after a run returns (``post_run``). Implementations must not block.
"""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "umpctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class UmpctlHookSpec:
    """Hook specifications for the umpctl plugin system."""

    @hookspec
    def post_perform(self, program: str, command: Any, event: Any) -> None:
        """Called after a command resolves to its event."""

    @hookspec
    def post_run(self, program: str, run_id: str, ok: bool, summary: dict[str, Any]) -> None:
        """Called after a run reaches quiescence."""
