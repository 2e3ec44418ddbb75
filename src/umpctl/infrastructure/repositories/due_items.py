"""Due item source and completion store backed by the ``due_items`` table."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from umpctl.domain.emailer import DueItem
from umpctl.infrastructure.database.schema import due_items
from umpctl.infrastructure.repositories._audit import now_iso
from umpctl.runtime.outcome import Err, Ok

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class DueItemRepository:
    """Read pending notifications and record their completion."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, email_address: str, notification_html: str, due_date: date) -> int:
        """Insert a pending item and return its id.

        Raises ``SQLAlchemyError`` on failure (callers outside a run).
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(due_items).values(
                    email_address=email_address,
                    notification_html=notification_html,
                    due_date=due_date.isoformat(),
                    completed=0,
                    created=now_iso(),
                )
            )
            assert result.lastrowid is not None
            return result.lastrowid

    def list_items(self, *, include_completed: bool = False) -> list[dict[str, Any]]:
        """Return items as plain dicts, oldest first."""
        stmt = select(due_items).order_by(due_items.c.id)
        if not include_completed:
            stmt = stmt.where(due_items.c.completed == 0)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [
            {
                "id": row.id,
                "email_address": row.email_address,
                "notification_html": row.notification_html,
                "due_date": row.due_date,
                "completed": bool(row.completed),
            }
            for row in rows
        ]

    def load_due(self, as_of: date) -> Ok[list[DueItem]] | Err[str]:
        """Uncompleted items due on or before *as_of*, in insertion order."""
        stmt = (
            select(due_items.c.id, due_items.c.email_address, due_items.c.notification_html)
            .where(due_items.c.completed == 0)
            .where(due_items.c.due_date <= as_of.isoformat())
            .order_by(due_items.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            logger.warning("Loading due items failed: %s", exc)
            return Err(str(exc))
        return Ok(
            [
                DueItem(
                    item_id=row.id,
                    email_address=row.email_address,
                    notification_html=row.notification_html,
                )
                for row in rows
            ]
        )

    def mark_completed(self, item_ids: Sequence[int]) -> Ok[None] | Err[str]:
        """Flag *item_ids* as completed. Marking an already-completed id is a no-op."""
        if not item_ids:
            return Ok(None)
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    update(due_items)
                    .where(due_items.c.id.in_(list(item_ids)))
                    .where(due_items.c.completed == 0)
                    .values(completed=1, completed_at=now_iso())
                )
        except SQLAlchemyError as exc:
            logger.warning("Marking items %s completed failed: %s", list(item_ids), exc)
            return Err(str(exc))
        return Ok(None)
