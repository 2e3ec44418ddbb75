"""Database engine setup for SQLite with WAL mode.

The DB is stored at {workspace_root}/.umpctl/umpctl.db. SQLAlchemy Core
(not ORM) is used: repositories issue short statements from worker threads
and never hold sessions across effects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from umpctl.infrastructure.database.schema import metadata

WORKSPACE_DIR = ".umpctl"
DB_FILENAME = "umpctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode, usable from worker threads."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def init_database(workspace_root: Path) -> Engine:
    """Create ``.umpctl/`` and all tables under *workspace_root*.

    Idempotent: safe to call on an existing workspace. Returns the engine.
    """
    workspace_dir = workspace_root / WORKSPACE_DIR
    workspace_dir.mkdir(parents=True, exist_ok=True)
    (workspace_dir / "plugins").mkdir(exist_ok=True)

    engine = create_db_engine(workspace_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
