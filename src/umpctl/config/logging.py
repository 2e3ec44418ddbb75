"""structlog configuration for umpctl.

Two output modes, both on stderr:
- Human (default): console renderer, colored on a TTY
- JSON (--log-json): one JSON object per line

Every record logged inside :func:`run_context` carries the program name and
run id, including records from stdlib loggers such as the loop engine's.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: ``umpctl`` loggers emit DEBUG (every drain, fire, command
            and event). When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("umpctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


@contextmanager
def run_context(program: str, run_id: str | None = None) -> Iterator[str]:
    """Bind ``program`` and ``run_id`` to every log record in the block.

    Yields the run id (a fresh short uuid unless one is given).
    """
    resolved = run_id or uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(program=program, run_id=resolved):
        yield resolved
