"""Tests for the `field` command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from fieldhooks.cli import cli


def _attach(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", "field", "attach", "articles", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


@pytest.mark.usefixtures("_isolated_site")
class TestAttach:
    def test_attach_json(self, cli_runner: CliRunner) -> None:
        out = _attach(cli_runner, "body", "--type", "text", "--required")
        assert out["ok"] is True
        assert out["op"] == "attach_field"
        assert out["data"]["name"] == "body"
        assert out["data"]["label"] == "Body"
        assert out["data"]["required"] is True

    def test_settings_values_decoded(self, cli_runner: CliRunner) -> None:
        out = _attach(
            cli_runner,
            "summary",
            "--type",
            "text",
            "--set",
            "type=text",
            "--set",
            "max_len=120",
        )
        assert out["data"]["settings"] == {"type": "text", "max_len": 120}

    def test_unknown_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "field", "attach", "articles", "x", "--type", "poll"]
        )
        assert result.exit_code == 1
        assert "UNKNOWN_FIELD_TYPE" in result.output

    def test_invalid_settings(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "field", "attach", "articles", "x", "--type", "text"]
            + ["--set", "type=select"],
        )
        assert result.exit_code == 1
        assert "INVALID_SETTINGS" in result.output

    def test_duplicate(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        result = cli_runner.invoke(
            cli, ["--json", "field", "attach", "articles", "body", "--type", "text"]
        )
        assert result.exit_code == 1
        assert "DUPLICATE" in result.output

    def test_malformed_set(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["field", "attach", "articles", "x", "--type", "text", "--set", "oops"]
        )
        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["field", "attach", "articles", "body", "--type", "text"])
        assert result.exit_code == 0
        assert "OK  attach_field" in result.output
        assert "name: body" in result.output


@pytest.mark.usefixtures("_isolated_site")
class TestListAndDetach:
    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        _attach(cli_runner, "summary", "--type", "text")
        result = cli_runner.invoke(cli, ["-q", "field", "list", "articles"])
        assert result.exit_code == 0
        assert result.output.split() == ["body", "summary"]

    def test_list_other_table_empty(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        result = cli_runner.invoke(cli, ["--json", "field", "list", "pages"])
        assert json.loads(result.output)["data"]["count"] == 0

    def test_detach(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        result = cli_runner.invoke(cli, ["--json", "field", "detach", "articles", "body"])
        assert result.exit_code == 0
        assert json.loads(result.output)["op"] == "detach_field"
        listed = cli_runner.invoke(cli, ["--json", "field", "list", "articles"])
        assert json.loads(listed.output)["data"]["fields"] == []

    def test_detach_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "field", "detach", "articles", "nope"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output


@pytest.mark.usefixtures("_isolated_site")
class TestSettingsForms:
    def test_settings_form(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        result = cli_runner.invoke(cli, ["--json", "field", "settings", "articles", "body"])
        assert result.exit_code == 0
        out = json.loads(result.output)
        assert out["op"] == "field_settings"
        assert out["data"]["html"]

    def test_formatter_form(self, cli_runner: CliRunner) -> None:
        _attach(cli_runner, "body", "--type", "text")
        result = cli_runner.invoke(
            cli, ["--json", "field", "settings", "articles", "body", "--formatter"]
        )
        assert json.loads(result.output)["op"] == "field_formatter"
