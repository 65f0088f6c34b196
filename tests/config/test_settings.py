"""Tests for FieldhooksSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from fieldhooks.config.settings import FieldhooksSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = FieldhooksSettings.from_cli(site_root=tmp_path)
        assert settings.site_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.site.title == "My Site"
        assert settings.site.locale == "en"
        assert settings.templates.menu_prefix == "Menu.render_menu"
        assert settings.templates.default_view_mode == "default"
        assert settings.text.default_processing == "plain"
        assert "strong" in settings.text.allowed_tags
        assert settings.plugins.disabled == []
        assert settings.plugins.local_discovery is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = FieldhooksSettings.from_cli(site_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "fieldhooks.toml").write_text(
            '[site]\ntitle = "Docs"\n[text]\ndefault_processing = "markdown"\n'
        )
        settings = FieldhooksSettings.from_cli(site_root=tmp_path)
        assert settings.site.title == "Docs"
        assert settings.site.locale == "en"
        assert settings.text.default_processing == "markdown"
        assert settings.config_path == tmp_path / "fieldhooks.toml"

    def test_site_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "fieldhooks.toml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = FieldhooksSettings.from_cli()
        assert settings.site_root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "site.toml"
        custom.parent.mkdir()
        custom.write_text('[site]\ntitle = "Custom"\n')
        settings = FieldhooksSettings.from_cli(config_path=str(custom), site_root=tmp_path)
        assert settings.site.title == "Custom"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "fieldhooks.toml").write_text("[site\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            FieldhooksSettings.from_cli(site_root=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "fieldhooks.toml").write_text('[text]\ndefault_processing = "bbcode"\n')
        with pytest.raises(ValidationError):
            FieldhooksSettings.from_cli(site_root=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "fieldhooks.toml").write_text('[site]\ntitle = "From TOML"\n')
        monkeypatch.setenv("FIELDHOOKS_SITE__TITLE", "From env")
        settings = FieldhooksSettings.from_cli(site_root=tmp_path)
        assert settings.site.title == "From env"

    def test_cli_flags_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIELDHOOKS_VERBOSE", "false")
        settings = FieldhooksSettings.from_cli(site_root=tmp_path, verbose=True)
        assert settings.verbose is True


class TestResolvePath:
    def test_relative_and_absolute(self, tmp_path: Path) -> None:
        settings = FieldhooksSettings.from_cli(site_root=tmp_path)
        assert settings.resolve_path(Path("themes")) == tmp_path / "themes"
        assert settings.resolve_path(tmp_path / "abs") == tmp_path / "abs"
        assert settings.resolve_path(None) is None

    def test_override_dir_used_by_site(self, tmp_path: Path) -> None:
        from fieldhooks.infrastructure.site import Site

        theme = tmp_path / "theme" / "menu"
        theme.mkdir(parents=True)
        (theme / "render_menu.html").write_text("themed")
        (tmp_path / "fieldhooks.toml").write_text('[templates]\noverride_dir = "theme"\n')
        site = Site(FieldhooksSettings.from_cli(site_root=tmp_path))
        try:
            assert site.templates.render("Menu.render_menu") == "themed"
        finally:
            site.close()
