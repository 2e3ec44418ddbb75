"""Email transport that delivers into the ``outbox`` table.

SMTP delivery is outside this project; a relay can drain the outbox.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from umpctl.infrastructure.database.schema import outbox
from umpctl.infrastructure.repositories._audit import now_iso
from umpctl.runtime.outcome import Err, Ok

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from umpctl.domain.emailer import Email

logger = logging.getLogger(__name__)


class OutboxTransport:
    """Record each email as one outbox row."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def send(self, email: Email) -> Ok[list[int]] | Err[str]:
        """Deliver *email*; on success returns the item ids it confirms."""
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(outbox).values(
                        sender=email.sender,
                        recipient=email.recipient,
                        subject=email.subject,
                        body=email.body,
                        item_ids=json.dumps(list(email.completed)),
                        sent_at=now_iso(),
                    )
                )
        except SQLAlchemyError as exc:
            logger.warning("Sending email to %s failed: %s", email.recipient, exc)
            return Err(str(exc))
        return Ok(list(email.completed))

    def list_sent(self) -> list[dict[str, Any]]:
        """All outbox rows, oldest first."""
        with self._engine.connect() as conn:
            rows = conn.execute(select(outbox).order_by(outbox.c.id)).fetchall()
        return [
            {
                "id": row.id,
                "sender": row.sender,
                "recipient": row.recipient,
                "subject": row.subject,
                "body": row.body,
                "item_ids": json.loads(row.item_ids),
                "sent_at": row.sent_at,
            }
            for row in rows
        ]
