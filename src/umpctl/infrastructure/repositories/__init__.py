"""Repositories: SQLAlchemy Core data access returning outcomes."""

from umpctl.infrastructure.repositories.counters import CounterRepository
from umpctl.infrastructure.repositories.due_items import DueItemRepository
from umpctl.infrastructure.repositories.outbox import OutboxTransport

__all__ = ["CounterRepository", "DueItemRepository", "OutboxTransport"]
