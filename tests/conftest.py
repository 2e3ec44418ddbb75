"""Shared pytest fixtures for umpctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from umpctl.config.settings import UmpSettings
from umpctl.infrastructure.database.engine import init_database
from umpctl.infrastructure.workspace import Workspace


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Workspace on a temp directory with plugins disabled."""
    monkeypatch.delenv("UMPCTL_CONFIG", raising=False)
    monkeypatch.setenv("UMPCTL_PLUGINS__ENABLED", "false")
    settings = UmpSettings.from_cli(workspace_root=tmp_path)
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated workspace.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.delenv("UMPCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
