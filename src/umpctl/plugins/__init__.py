"""Extension layer: run observers via pluggy.

Discovery: entry_points (``umpctl.plugins`` group) plus single-file plugins
in ``.umpctl/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from umpctl.plugins.hookspecs import hookimpl
from umpctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
