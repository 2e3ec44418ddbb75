"""Tests for DueItemService."""

from __future__ import annotations

from datetime import date

from umpctl.services.due import DueItemService


class TestAdd:
    def test_add_and_list(self, workspace):
        service = DueItemService(workspace)
        result = service.add(" a@x ", "<b>hi</b>", due=date(2024, 5, 1))
        assert result.ok
        assert result.data == {"id": 1, "email_address": "a@x", "due_date": "2024-05-01"}

        listing = service.list_items()
        assert listing.data["count"] == 1
        assert listing.data["items"][0]["notification_html"] == "<b>hi</b>"

    def test_defaults_to_today(self, workspace):
        assert DueItemService(workspace).add("a@x", "hi").data["due_date"]

    def test_rejects_bad_address(self, workspace):
        result = DueItemService(workspace).add("nobody", "hi")
        assert result.error.code == "INVALID_INPUT"

    def test_rejects_empty_notification(self, workspace):
        result = DueItemService(workspace).add("a@x", "   ")
        assert result.error.code == "INVALID_INPUT"
