"""Tests for human and JSON result formatting."""

from __future__ import annotations

import json

from umpctl.output.formatters import OutputSettings, format_result
from umpctl.services.result import ServiceError, ServiceResult

OK = ServiceResult(
    ok=True,
    op="send_due",
    data={"emails_sent": 2, "items_completed": [1, 2, 3]},
    meta={"run_id": "abc"},
)
FAILED = ServiceResult(
    ok=False,
    op="decrement_counter",
    error=ServiceError(code="NOT_FOUND", message="credits [missing]"),
)


class TestHuman:
    def test_success_lists_data(self):
        text = format_result(OK)
        assert text.splitlines() == [
            "OK: send_due",
            "  emails_sent: 2",
            "  items_completed: [1,2,3]",
        ]

    def test_quiet_hides_data(self):
        assert format_result(OK, settings=OutputSettings(quiet=True)) == "OK: send_due"

    def test_verbose_shows_meta(self):
        text = format_result(OK, settings=OutputSettings(verbose=True))
        assert "  meta.run_id: abc" in text.splitlines()

    def test_error_line_keeps_brackets(self):
        assert format_result(FAILED) == "ERROR: decrement_counter (NOT_FOUND) credits [missing]"


class TestJson:
    def test_json_round_trips(self):
        payload = json.loads(format_result(OK, settings=OutputSettings(json_output=True)))
        assert payload["ok"] is True
        assert payload["data"]["items_completed"] == [1, 2, 3]
        assert payload["error"] is None
