"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin loading failures are warnings, never errors.
"""

from fieldhooks.plugins.hookspecs import hookimpl
from fieldhooks.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
