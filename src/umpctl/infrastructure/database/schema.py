"""SQLAlchemy Core table definitions for the umpctl database."""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

due_items = Table(
    "due_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email_address", Text, nullable=False),
    Column("notification_html", Text, nullable=False),
    Column("due_date", Text, nullable=False),  # YYYY-MM-DD
    Column("completed", Integer, default=0, server_default="0"),
    Column("completed_at", Text),
    Column("created", Text, nullable=False),
)

# One row per delivered email. item_ids is a JSON array of due_items.id.
outbox = Table(
    "outbox",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("sender", Text, nullable=False),
    Column("recipient", Text, nullable=False),
    Column("subject", Text, nullable=False),
    Column("body", Text, nullable=False),
    Column("item_ids", Text, nullable=False),
    Column("sent_at", Text, nullable=False),
)

counters = Table(
    "counters",
    metadata,
    Column("counter_id", Text, primary_key=True),
    Column("count", Integer, nullable=False),
    Column("modified", Text, nullable=False),
)

Index("ix_due_items_pending", due_items.c.completed, due_items.c.due_date)
Index("ix_outbox_recipient", outbox.c.recipient)
