"""Workspace: the single dependency injected into every service.

Owns the database engine (created lazily under ``.umpctl/``), the
repositories built on it, and the plugin manager.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from umpctl.infrastructure.database.engine import WORKSPACE_DIR, init_database
from umpctl.infrastructure.repositories import (
    CounterRepository,
    DueItemRepository,
    OutboxTransport,
)

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from umpctl.config.settings import UmpSettings
    from umpctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Workspace:
    """Database-backed collaborators for one workspace directory."""

    def __init__(self, settings: UmpSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._plugins: PluginManager | None = None

    @property
    def root(self) -> Path:
        return self.settings.workspace_root

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine; creates the database on first access."""
        if self._engine is None:
            self._engine = init_database(self.root)
            logger.debug("Opened workspace database under %s", self.root / WORKSPACE_DIR)
        return self._engine

    @property
    def due_items(self) -> DueItemRepository:
        return DueItemRepository(self.engine)

    @property
    def outbox(self) -> OutboxTransport:
        return OutboxTransport(self.engine)

    @property
    def counters(self) -> CounterRepository:
        return CounterRepository(self.engine)

    @property
    def plugins(self) -> PluginManager | None:
        """Loaded plugin manager, or None when plugins are disabled."""
        if not self.settings.plugins.enabled:
            return None
        if self._plugins is None:
            from umpctl.plugins.manager import PluginManager

            pm = PluginManager()
            pm.discover_and_load(local_dir=self.root / WORKSPACE_DIR / "plugins")
            self._plugins = pm
        return self._plugins

    def close(self) -> None:
        """Dispose the engine, if one was opened."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
