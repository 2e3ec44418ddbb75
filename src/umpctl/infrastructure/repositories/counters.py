"""Counter state store backed by the ``counters`` table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from umpctl.infrastructure.database.schema import counters
from umpctl.infrastructure.repositories._audit import now_iso
from umpctl.runtime.outcome import Err, Ok

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class CounterRepository:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def load(self, counter_id: str) -> Ok[int | None] | Err[str]:
        """Current count, ``Ok(None)`` when the counter does not exist."""
        try:
            with self._engine.connect() as conn:
                value = conn.execute(
                    select(counters.c.count).where(counters.c.counter_id == counter_id)
                ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.warning("Loading counter %s failed: %s", counter_id, exc)
            return Err(str(exc))
        return Ok(value)

    def save(self, counter_id: str, count: int) -> Ok[None] | Err[str]:
        """Create or overwrite *counter_id*."""
        stmt = insert(counters).values(counter_id=counter_id, count=count, modified=now_iso())
        stmt = stmt.on_conflict_do_update(
            index_elements=[counters.c.counter_id],
            set_={"count": stmt.excluded.count, "modified": stmt.excluded.modified},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            logger.warning("Saving counter %s failed: %s", counter_id, exc)
            return Err(str(exc))
        return Ok(None)
