"""Tests for fieldhooks.toml walk-up discovery."""

from pathlib import Path

import pytest

from fieldhooks.config.discovery import find_config


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        (tmp_path / "fieldhooks.toml").write_text("")
        assert find_config(tmp_path) == (tmp_path / "fieldhooks.toml").resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "fieldhooks.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "fieldhooks.toml").resolve()

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        nested = tmp_path / "empty"
        nested.mkdir()
        assert find_config(nested) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "elsewhere.toml"
        custom.write_text("")
        monkeypatch.setenv("FIELDHOOKS_CONFIG", str(custom))
        assert find_config(tmp_path / "ignored") == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "fieldhooks.toml").write_text("")
        monkeypatch.setenv("FIELDHOOKS_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
