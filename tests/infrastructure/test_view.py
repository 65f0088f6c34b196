"""Tests for View rendering, blocks, elements and layout metadata."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from fieldhooks.domain.menus import Block
from fieldhooks.infrastructure.site import Site
from fieldhooks.plugins.hookspecs import hookimpl
from tests.conftest import text_field


class Greeter:
    @hookimpl
    def alter_element(self, view: Any, name: str, data: dict[str, Any]) -> None:
        if name == "greet":
            data["name"] = "altered"


class TestContentBlocks:
    def test_assign_append_fetch(self, site: Site) -> None:
        view = site.view()
        view.assign("content", "a")
        view.append("content", "b")
        view.append("sidebar", "x")
        assert view.fetch("content") == "ab"
        assert view.fetch("sidebar") == "x"
        assert view.fetch("missing", "none") == "none"


class TestViewModes:
    def test_default_from_settings(self, site: Site) -> None:
        assert site.view().in_use_view_mode() == "default"

    def test_switch_restores(self, site: Site) -> None:
        view = site.view(view_mode="full")
        with view.switch_view_mode("teaser"):
            assert view.in_use_view_mode() == "teaser"
            with view.switch_view_mode("search-result"):
                assert view.in_use_view_mode() == "search-result"
            assert view.in_use_view_mode() == "teaser"
        assert view.in_use_view_mode() == "full"


class TestLayout:
    def test_site_fallback(self, site: Site) -> None:
        view = site.view()
        html = view.render()
        assert "<title>My Site</title>" in html
        assert '<meta name="description" content=""/>' in html
        assert view.view_vars["title_for_layout"] == "My Site"

    def test_renders_once(self, site: Site) -> None:
        view = site.view()
        assert view.render() != ""
        assert view.render() == ""
        assert view.render("Layout.default") == ""

    def test_node_title_and_description(self, site: Site) -> None:
        node = SimpleNamespace(title="Hello", description='Say "hi" <now>')
        view = site.view({"node": node})
        html = view.render()
        assert "<title>Hello</title>" in html
        assert view.fetch("title") == "Hello"
        assert 'content="Say &#34;hi&#34; &lt;now&gt;"' in html

    def test_any_object_var_is_a_main_object(self, site: Site) -> None:
        view = site.view({"page": SimpleNamespace(title="Page title")})
        view.render()
        assert view.view_vars["title_for_layout"] == "Page title"

    def test_mappings_are_not_main_objects(self, site: Site) -> None:
        view = site.view({"page": {"title": "ignored"}})
        view.render()
        assert view.view_vars["title_for_layout"] == "My Site"

    def test_explicit_values_kept(self, site: Site) -> None:
        view = site.view({"title_for_layout": "Mine", "description_for_layout": "Desc"})
        view.render()
        assert view.fetch("title") == "Mine"
        assert view.fetch("description") == "Desc"
        assert view.fetch("meta") == ""

    def test_content_block_in_layout(self, site: Site) -> None:
        view = site.view()
        view.assign("content", "<p>body</p>")
        assert "<p>body</p>" in view.render()


class TestObjectRendering:
    def test_field_definition(self, site: Site) -> None:
        html = site.view().render(text_field(value="hi there"))
        assert "field-body" in html
        assert "hi there" in html

    def test_field_options_argument(self, site: Site) -> None:
        html = site.view().render(text_field(value="x"), {"label": "hidden"})
        assert "field-label" not in html

    def test_unhandled_object_is_empty(self, site: Site) -> None:
        assert site.view().render(object()) == ""


class TestElements:
    def test_alter_element_hook(self, site: Site) -> None:
        (site.data_dir / "templates" / "greet.html").write_text("Hello {{ name }}")
        site.plugins.register_plugin(Greeter())
        data = {"name": "world"}
        assert site.view().element("greet", data) == "Hello altered"
        assert data == {"name": "world"}

    def test_element_exists(self, site: Site) -> None:
        view = site.view()
        assert view.element_exists("Field.text_field_display")
        assert not view.element_exists("Field.nope")


class TestBlocks:
    def test_unhandled_block_is_empty(self, site: Site) -> None:
        block = Block(id=1, handler="Poll", delta="3", region="sidebar")
        assert site.view().render_block(block) == ""
