"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.fieldhooks/plugins/``.
Capabilities: field handlers, hooktags, block/object rendering, element
alteration.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from fieldhooks.plugins.hookspecs import PROJECT_NAME, FieldhooksHookSpec

if TYPE_CHECKING:
    from fieldhooks.infrastructure.site import Site

ENTRY_POINT_GROUP = "fieldhooks.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch.

    Once bound to a :class:`Site`, every plugin's field handlers and
    hooktags are installed into the site's registry and expander, both
    at :meth:`discover_and_load` time and for plugins registered later.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FieldhooksHookSpec)
        self._site: Site | None = None
        self._loaded: bool = False

    def bind(self, site: Site) -> None:
        """Attach the site whose registry and expander receive extensions."""
        self._site = site

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        disabled: Iterable[str] = (),
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Names in *disabled* are blocked before anything is installed.
        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        for name in disabled:
            self._pm.set_blocked(name)
            logger.debug("Blocked plugin: %s", name)
        self._install_extensions()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._install_plugin_extensions(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching render hooks."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins, in registration order."""
        return [name for name, p in self._pm.list_name_plugin() if p is not None]

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised: a broken local plugin
        must not prevent the rest of the site from starting.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"fieldhooks_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    instance = obj()
                    self._pm.register(instance, name=f"{module_name}.{obj.__name__}")
                    logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    # ------------------------------------------------------------------
    # Extension installation
    # ------------------------------------------------------------------

    def _install_extensions(self) -> None:
        """Install extensions of every plugin, in registration order."""
        for plugin_name, plugin in self._pm.list_name_plugin():
            if plugin is None:  # blocked
                continue
            self._install_plugin_extensions(plugin, plugin_name)

    def _install_plugin_extensions(self, plugin: object, plugin_name: str) -> None:
        """Install the handlers and hooktags exposed by a single plugin."""
        if self._site is None:
            return
        self._install_handlers(plugin, plugin_name, self._site)
        self._install_hooktags(plugin, plugin_name, self._site)

    @staticmethod
    def _install_handlers(plugin: object, plugin_name: str, site: Site) -> None:
        from fieldhooks.fields.base import FieldHandler

        hook = getattr(plugin, "register_field_handlers", None)
        if hook is None:
            return
        try:
            handler_map = hook(site=site)
        except Exception:
            logger.warning(
                "Failed to collect field handlers from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if handler_map is None:
            return
        if not isinstance(handler_map, dict):
            logger.warning("Plugin %s returned non-dict field handler registrations", plugin_name)
            return

        for type_name, handler in handler_map.items():
            if not isinstance(handler, FieldHandler):
                logger.warning(
                    "Skipping field handler %r from plugin %s: not a FieldHandler",
                    type_name,
                    plugin_name,
                )
                continue
            try:
                site.registry.register(type_name, handler)
            except ValueError:
                logger.warning(
                    "Skipping field handler registration %r from plugin %s",
                    type_name,
                    plugin_name,
                    exc_info=True,
                )

    @staticmethod
    def _install_hooktags(plugin: object, plugin_name: str, site: Site) -> None:
        hook = getattr(plugin, "register_hooktags", None)
        if hook is None:
            return
        try:
            tag_map = hook(site=site)
        except Exception:
            logger.warning("Failed to collect hooktags from plugin %s", plugin_name, exc_info=True)
            return

        if not tag_map:
            return
        if not isinstance(tag_map, dict):
            logger.warning("Plugin %s returned non-dict hooktag registrations", plugin_name)
            return

        for name, func in tag_map.items():
            try:
                site.hooktags.register(name, func)
            except ValueError:
                logger.warning(
                    "Skipping hooktag %r from plugin %s",
                    name,
                    plugin_name,
                    exc_info=True,
                )

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("fieldhooks")`` sets a ``fieldhooks_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "fieldhooks_impl", None):
                return True
        return False
