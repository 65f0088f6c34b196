"""Site — the single dependency injected into every service.

The Site owns the database engine, the repositories, the field handler
registry and its lifecycle dispatcher, the template engine, the
translator, the hooktag expander and the plugin manager. Built-in
plugins are registered first, then entry-point and local plugins are
discovered, so a third-party plugin may replace a built-in handler by
registering the same type name.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fieldhooks.fields.dispatcher import LifecycleDispatcher
from fieldhooks.fields.registry import FieldHandlerRegistry
from fieldhooks.infrastructure.database.engine import DATA_DIRNAME, init_database
from fieldhooks.infrastructure.hooktags import HooktagExpander
from fieldhooks.infrastructure.repositories import FieldRepository, MenuRepository
from fieldhooks.infrastructure.resolution import TemplateResolver
from fieldhooks.infrastructure.templates import TemplateEngine, build_template_environment
from fieldhooks.infrastructure.translation import Translator
from fieldhooks.infrastructure.view import View
from fieldhooks.plugins.manager import PluginManager

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from fieldhooks.config.settings import FieldhooksSettings

logger = logging.getLogger(__name__)


class Site:
    """Wires storage, rendering and extension points for one site root.

    Constructed once at CLI startup from :class:`FieldhooksSettings` and
    stored on the command context. Services receive the Site via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: FieldhooksSettings, *, load_plugins: bool = True) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)
        self._fields = FieldRepository(self._engine)
        self._menus = MenuRepository(self._engine)

        self._registry = FieldHandlerRegistry()
        self._dispatcher = LifecycleDispatcher(self._registry)

        override_dir = settings.resolve_path(settings.templates.override_dir)
        if override_dir is None:
            override_dir = self.data_dir / "templates"
        self._templates = TemplateEngine(build_template_environment(override_dir=override_dir))
        self._translator = Translator(
            locale=settings.site.locale,
            locale_dir=settings.resolve_path(settings.site.locale_dir),
        )
        self._hooktags = HooktagExpander()
        self._resolvers: dict[str, TemplateResolver] = {}

        self._plugins = PluginManager()
        self._plugins.bind(self)
        if load_plugins:
            self.init_plugins()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        """The site root directory."""
        return self._settings.site_root

    @property
    def data_dir(self) -> Path:
        return self.root / DATA_DIRNAME

    @property
    def settings(self) -> FieldhooksSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def fields(self) -> FieldRepository:
        return self._fields

    @property
    def menus(self) -> MenuRepository:
        return self._menus

    @property
    def registry(self) -> FieldHandlerRegistry:
        return self._registry

    @property
    def dispatcher(self) -> LifecycleDispatcher:
        return self._dispatcher

    @property
    def templates(self) -> TemplateEngine:
        return self._templates

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def hooktags(self) -> HooktagExpander:
        return self._hooktags

    @property
    def plugins(self) -> PluginManager:
        return self._plugins

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def init_plugins(self) -> list[str]:
        """Register built-in plugins, then discover external ones.

        Returns the names of every loaded plugin. Idempotent.
        """
        if self._plugins.is_loaded:
            return self._plugins.list_plugin_names()

        from fieldhooks.plugins.builtins.fields import FieldRenderPlugin
        from fieldhooks.plugins.builtins.hooktags import SiteHooktags
        from fieldhooks.plugins.builtins.menu import MenuHook
        from fieldhooks.plugins.builtins.text import TextFieldPlugin

        self._plugins.register_plugin(TextFieldPlugin(), name="text-builtin")
        self._plugins.register_plugin(SiteHooktags(), name="hooktags-builtin")
        self._plugins.register_plugin(FieldRenderPlugin(), name="field-render-builtin")
        self._plugins.register_plugin(MenuHook(), name="menu-builtin")

        plugins_config = self._settings.plugins
        local_dir = self.data_dir / "plugins" if plugins_config.local_discovery else None
        names = self._plugins.discover_and_load(
            local_dir=local_dir,
            disabled=plugins_config.disabled,
        )
        logger.debug("Loaded plugins: %s", ", ".join(names))
        logger.debug("Hooktags: %s", ", ".join(self._hooktags.names()))
        return names

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def resolver(self, prefix: str | None = None) -> TemplateResolver:
        """The memoizing template resolver for *prefix*.

        One resolver, with its own cache, exists per prefix for the
        lifetime of the site. Defaults to the configured menu prefix.
        """
        prefix = prefix or self._settings.templates.menu_prefix
        resolver = self._resolvers.get(prefix)
        if resolver is None:
            resolver = TemplateResolver(self._templates.exists, prefix=prefix)
            self._resolvers[prefix] = resolver
        return resolver

    def view(
        self,
        view_vars: dict[str, Any] | None = None,
        *,
        view_mode: str | None = None,
    ) -> View:
        """Create a fresh :class:`View` for one rendering request."""
        return View(self, view_vars, view_mode=view_mode)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Database transaction; commits on success, rolls back on error.

        Usage::

            with site.transaction() as conn:
                site.fields.insert_instance(conn, ...)
        """
        with self._engine.begin() as conn:
            yield conn

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()
