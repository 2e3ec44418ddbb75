"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, umpctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- umpctl.toml sections ---


class EmailerConfig(BaseModel):
    """[emailer] section."""

    model_config = {"frozen": True}

    send_from: str = "Notificator <notify@example.com>"
    subject_template: str = "[My App] New Notifications"
    send_limit_per_second: int = Field(default=1, ge=1)
    resend_interval_seconds: float = Field(default=1.0, ge=0.0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


DEFAULT_TOML = """\
[emailer]
send_from = "Notificator <notify@example.com>"
subject_template = "[My App] New Notifications"
send_limit_per_second = 1
"""
