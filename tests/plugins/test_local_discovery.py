"""Tests for local directory plugin discovery in PluginManager."""

from __future__ import annotations

from pathlib import Path

from fieldhooks.config.settings import FieldhooksSettings
from fieldhooks.infrastructure.site import Site
from fieldhooks.plugins.manager import PluginManager

# -- Plugin source code used in tests ------------------------------------------

_HOOKTAG_PLUGIN_SRC = """\
from fieldhooks.plugins.hookspecs import hookimpl


class ShoutPlugin:
    @hookimpl
    def register_hooktags(self, site):
        return {"shout": lambda attrs, content, code: (content or "").upper()}
"""

_HANDLER_PLUGIN_SRC = """\
from fieldhooks.domain.fields import HandlerDescriptor
from fieldhooks.fields.base import FieldHandler
from fieldhooks.plugins.hookspecs import hookimpl


class NumberField(FieldHandler):
    type_name = "number"

    def info(self, context):
        return HandlerDescriptor(name="Number", description="Whole numbers.")

    def display(self, context):
        return str(context.field.value)

    def edit(self, context):
        return "<input type='number' />"


class NumberPlugin:
    @hookimpl
    def register_field_handlers(self, site):
        return {"number": NumberField()}
"""

_SYNTAX_ERROR_SRC = """\
def broken(
    # missing closing paren and colon
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self) -> str:
        return "world"
"""


def _site_with(site_root: Path, **sources: str) -> Site:
    plugin_dir = site_root / ".fieldhooks" / "plugins"
    plugin_dir.mkdir(parents=True, exist_ok=True)
    for name, src in sources.items():
        (plugin_dir / f"{name}.py").write_text(src, encoding="utf-8")
    return Site(FieldhooksSettings.from_cli(site_root=site_root))


class TestLocalDiscovery:
    def test_discovers_hooktag_plugin(self, site_root: Path) -> None:
        site = _site_with(site_root, shout=_HOOKTAG_PLUGIN_SRC)
        try:
            names = site.plugins.list_plugin_names()
            assert "fieldhooks_local_plugin_shout.ShoutPlugin" in names
            assert site.hooktags.expand("[shout]hi[/shout]") == "HI"
        finally:
            site.close()

    def test_discovers_field_handler(self, site_root: Path) -> None:
        site = _site_with(site_root, number=_HANDLER_PLUGIN_SRC)
        try:
            assert "number" in site.registry
            assert [name for name, _ in site.registry.list_handlers()] == ["text", "number"]
        finally:
            site.close()

    def test_skips_bad_plugin_gracefully(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text(_SYNTAX_ERROR_SRC, encoding="utf-8")
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path) == []

    def test_skips_classes_without_hooks(self, tmp_path: Path) -> None:
        (tmp_path / "plain.py").write_text(_NO_HOOKS_SRC, encoding="utf-8")
        assert PluginManager().discover_and_load(local_dir=tmp_path) == []

    def test_skips_underscore_files(self, tmp_path: Path) -> None:
        (tmp_path / "_private.py").write_text(_HOOKTAG_PLUGIN_SRC, encoding="utf-8")
        assert PluginManager().discover_and_load(local_dir=tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert PluginManager().discover_and_load(local_dir=tmp_path / "nope") == []

    def test_local_discovery_disabled(self, site_root: Path) -> None:
        (site_root / "fieldhooks.toml").write_text("[plugins]\nlocal_discovery = false\n")
        site = _site_with(site_root, shout=_HOOKTAG_PLUGIN_SRC)
        try:
            assert "shout" not in site.hooktags.names()
        finally:
            site.close()
