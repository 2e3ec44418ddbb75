"""SQLite database engine and schema via SQLAlchemy Core."""

from umpctl.infrastructure.database.engine import create_db_engine, init_database
from umpctl.infrastructure.database.schema import counters, due_items, metadata, outbox

__all__ = [
    "counters",
    "create_db_engine",
    "due_items",
    "init_database",
    "metadata",
    "outbox",
]
