"""DueItemService: queue notifications and inspect the queue."""

from __future__ import annotations

from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from umpctl.services._helpers import today_utc
from umpctl.services.base import BaseService
from umpctl.services.result import ServiceError, ServiceResult


class DueItemService(BaseService):
    def add(
        self,
        email_address: str,
        notification_html: str,
        *,
        due: date | None = None,
    ) -> ServiceResult:
        """Queue a notification for *email_address*, due on *due* (default today)."""
        op = "add_due_item"
        address = email_address.strip()
        if "@" not in address:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_INPUT",
                    message=f"Not an email address: {email_address!r}",
                ),
            )
        if not notification_html.strip():
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message="Notification is empty"),
            )

        due_date = due or today_utc()
        try:
            item_id = self._workspace.due_items.add(address, notification_html, due_date)
        except SQLAlchemyError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="DB_ERROR", message=str(exc)),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": item_id, "email_address": address, "due_date": due_date.isoformat()},
        )

    def list_items(self, *, include_completed: bool = False) -> ServiceResult:
        items = self._workspace.due_items.list_items(include_completed=include_completed)
        return ServiceResult(
            ok=True,
            op="list_due_items",
            data={"items": items, "count": len(items)},
        )
