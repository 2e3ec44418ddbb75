"""Tests for Ok/Err outcomes and bind_update."""

from __future__ import annotations

import pytest

from umpctl.runtime.errors import OutcomeError
from umpctl.runtime.outcome import Err, Ok, bind_update


class TestOk:
    def test_flags(self):
        assert Ok(1).is_ok()
        assert not Ok(1).is_err()

    def test_map(self):
        assert Ok(2).map(lambda v: v * 10) == Ok(20)

    def test_unwrap(self):
        assert Ok("x").unwrap() == "x"
        assert Ok("x").unwrap_or("y") == "x"


class TestErr:
    def test_flags(self):
        assert Err("boom").is_err()
        assert not Err("boom").is_ok()

    def test_map_is_identity(self):
        err = Err("boom")
        assert err.map(lambda v: v * 10) is err

    def test_unwrap_raises(self):
        with pytest.raises(OutcomeError, match="boom"):
            Err("boom").unwrap()

    def test_unwrap_or(self):
        assert Err("boom").unwrap_or(5) == 5


class TestBindUpdate:
    def test_ok_model_is_unwrapped(self):
        seen = []

        def update(event, value):
            seen.append((event, value))
            return Ok(value + event), ["cmd"]

        model, commands = bind_update(update)(3, Ok(4))
        assert seen == [(3, 4)]
        assert model == Ok(7)
        assert commands == ["cmd"]

    def test_err_model_passes_through(self):
        def update(event, value):
            raise AssertionError("update must not run on a failed model")

        failed = Err("earlier failure")
        model, commands = bind_update(update)("late event", failed)
        assert model is failed
        assert commands == []
