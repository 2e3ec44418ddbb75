"""Generic effect loop: pure ``update``, concurrent ``perform``.

This layer depends only on stdlib, anyio and structlog. It never imports
from domain, services, infrastructure, or commands.
"""

from umpctl.runtime.errors import EffectContractError, OutcomeError, UmpError
from umpctl.runtime.executor import dispatch
from umpctl.runtime.loop import drain_one, fire, run, run_sync, start
from umpctl.runtime.outcome import Err, Ok, Outcome, bind_update
from umpctl.runtime.program import Program, RunState, fold_events
from umpctl.runtime.tracing import logged_perform, observed_perform

__all__ = [
    "EffectContractError",
    "Err",
    "Ok",
    "Outcome",
    "OutcomeError",
    "Program",
    "RunState",
    "UmpError",
    "bind_update",
    "dispatch",
    "drain_one",
    "fire",
    "fold_events",
    "logged_perform",
    "observed_perform",
    "run",
    "run_sync",
    "start",
]
