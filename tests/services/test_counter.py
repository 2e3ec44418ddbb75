"""Tests for CounterService."""

from __future__ import annotations

import pytest

from umpctl.services.counter import CounterService


class TestDecrement:
    def test_decrements_stored_value(self, workspace):
        service = CounterService(workspace)
        service.set_value("credits", 10)

        result = service.decrement("credits", 3)
        assert result.ok
        assert result.data == {"counter_id": "credits", "count": 7}
        assert workspace.counters.load("credits").value == 7
        assert "run_id" in result.meta

    @pytest.mark.parametrize(
        ("setup", "amount", "code"),
        [
            (None, 1, "NOT_FOUND"),
            (2, 5, "WOULD_GO_NEGATIVE"),
            (2, -1, "INVALID_INPUT"),
        ],
    )
    def test_failures(self, workspace, setup, amount, code):
        service = CounterService(workspace)
        if setup is not None:
            service.set_value("credits", setup)

        result = service.decrement("credits", amount)
        assert not result.ok
        assert result.error.code == code
        assert result.error.detail == {"counter_id": "credits", "amount": amount}

    def test_failed_decrement_leaves_value(self, workspace):
        service = CounterService(workspace)
        service.set_value("credits", 2)
        service.decrement("credits", 5)
        assert workspace.counters.load("credits").value == 2


class TestSetValue:
    def test_negative_rejected(self, workspace):
        result = CounterService(workspace).set_value("credits", -1)
        assert result.error.code == "INVALID_INPUT"
