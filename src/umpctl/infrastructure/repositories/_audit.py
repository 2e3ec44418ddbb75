"""Audit column values shared by the repositories."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()
