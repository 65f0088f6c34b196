"""Tests for PluginManager registration and extension installation."""

from __future__ import annotations

from typing import Any

import pytest

from fieldhooks.fields.base import FieldHandler
from fieldhooks.infrastructure.site import Site
from fieldhooks.plugins.hookspecs import hookimpl
from fieldhooks.plugins.manager import PluginManager
from tests.conftest import RecordingHandler


class RecordingPlugin:
    @hookimpl
    def register_field_handlers(self, site: Site) -> dict[str, FieldHandler]:
        return {"recording": RecordingHandler()}


class BadHandlersPlugin:
    @hookimpl
    def register_field_handlers(self, site: Site) -> dict[str, Any]:
        return {"not-a-handler": object(), "": RecordingHandler()}


class ExplodingPlugin:
    @hookimpl
    def register_field_handlers(self, site: Site) -> dict[str, FieldHandler]:
        raise RuntimeError("boom")

    @hookimpl
    def register_hooktags(self, site: Site) -> dict[str, Any]:
        return {"bad name": lambda _a, _c, _code: ""}


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        assert PluginManager().hook is not None

    @pytest.mark.parametrize(
        "hook_name",
        [
            "register_field_handlers",
            "register_hooktags",
            "display_block",
            "render_object",
            "alter_element",
        ],
    )
    def test_all_hookspecs_registered(self, hook_name: str) -> None:
        assert hasattr(PluginManager().hook, hook_name)

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(RecordingPlugin())
        assert pm.list_plugin_names() == ["RecordingPlugin"]

    def test_is_loaded_false_before_discover(self) -> None:
        pm = PluginManager()
        assert not pm.is_loaded
        pm.discover_and_load()
        assert pm.is_loaded

    def test_unbound_manager_installs_nothing(self) -> None:
        pm = PluginManager()
        pm.register_plugin(RecordingPlugin(), name="rec")
        assert pm.discover_and_load() == ["rec"]


class TestExtensionInstall:
    def test_plugin_registered_after_load(self, site: Site) -> None:
        site.plugins.register_plugin(RecordingPlugin(), name="rec")
        assert "recording" in site.registry

    def test_plugin_replaces_builtin_type(self, site: Site) -> None:
        handler = RecordingHandler()

        class Override:
            @hookimpl
            def register_field_handlers(self, site: Site) -> dict[str, FieldHandler]:
                return {"text": handler}

        site.plugins.register_plugin(Override())
        assert site.registry.resolve("text") is handler

    def test_invalid_handlers_skipped(self, site: Site, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="fieldhooks.plugins.manager"):
            site.plugins.register_plugin(BadHandlersPlugin(), name="bad")
        assert "not-a-handler" not in site.registry
        assert len(site.registry) == 1
        assert "not a FieldHandler" in caplog.text

    def test_plugin_errors_do_not_propagate(
        self, site: Site, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING", logger="fieldhooks.plugins.manager"):
            site.plugins.register_plugin(ExplodingPlugin(), name="exploding")
        assert "Failed to collect field handlers" in caplog.text
        assert "bad name" not in site.hooktags.names()

    def test_blocked_plugin_not_installed(self, settings: Any) -> None:
        s = Site(settings, load_plugins=False)
        try:
            s.plugins.register_plugin(RecordingPlugin(), name="rec")
            s.plugins.discover_and_load(disabled=["rec"])
            assert "recording" not in s.registry
        finally:
            s.close()
