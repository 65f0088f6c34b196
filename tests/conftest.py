"""Shared pytest fixtures and test helpers for fieldhooks tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from fieldhooks.config.settings import FieldhooksSettings
from fieldhooks.domain.fields import (
    FieldDefinition,
    FieldMetadata,
    HandlerDescriptor,
    InvocationContext,
)
from fieldhooks.fields.base import FieldHandler
from fieldhooks.infrastructure.site import Site


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FIELDHOOKS_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.startswith("FIELDHOOKS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory. Shared by ``site`` and ``_isolated_site``."""
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> FieldhooksSettings:
    return FieldhooksSettings.from_cli(site_root=site_root)


@pytest.fixture
def site(settings: FieldhooksSettings) -> Site:
    """Fully initialized site (database, built-in plugins) on a temp directory."""
    s = Site(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp site root so the CLI creates an isolated site.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def text_field(
    name: str = "body",
    *,
    required: bool = False,
    value: Any = None,
    table: str = "articles",
    **settings: Any,
) -> FieldDefinition:
    """A ``text`` FieldDefinition with the given settings."""
    return FieldDefinition(
        name=name,
        type="text",
        label=name.title(),
        table=table,
        metadata=FieldMetadata(required=required, settings=settings),
        value=value,
    )


class RecordingHandler(FieldHandler):
    """Field handler that records every call and answers gates as told.

    ``answers`` maps a phase method name to the value it returns.
    """

    type_name = "recording"

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self.answers = dict(answers or {})
        self.calls: list[tuple[str, str]] = []

    def _record(self, phase: str, context: InvocationContext, default: Any) -> Any:
        self.calls.append((phase, context.field.name))
        return self.answers.get(phase, default)

    def phases_called(self) -> list[str]:
        return [phase for phase, _name in self.calls]

    def info(self, context: InvocationContext) -> HandlerDescriptor:
        return HandlerDescriptor(name="Recording", description="Records calls.")

    def display(self, context: InvocationContext) -> str:
        return self._record("display", context, f"<p>{context.field.value}</p>")

    def edit(self, context: InvocationContext) -> str:
        return self._record("edit", context, "<input>")

    def before_find(self, context: InvocationContext) -> bool | None:
        return self._record("before_find", context, True)

    def before_validate(self, context: InvocationContext) -> bool | None:
        return self._record("before_validate", context, True)

    def after_validate(self, context: InvocationContext) -> bool | None:
        return self._record("after_validate", context, True)

    def after_save(self, context: InvocationContext) -> None:
        self._record("after_save", context, None)
        super().after_save(context)

    def before_delete(self, context: InvocationContext) -> bool | None:
        return self._record("before_delete", context, True)

    def after_delete(self, context: InvocationContext) -> Any:
        return self._record("after_delete", context, None)

    def before_attach(self, context: InvocationContext) -> bool | None:
        return self._record("before_attach", context, True)

    def after_attach(self, context: InvocationContext) -> Any:
        return self._record("after_attach", context, None)

    def before_detach(self, context: InvocationContext) -> bool | None:
        return self._record("before_detach", context, True)

    def after_detach(self, context: InvocationContext) -> Any:
        return self._record("after_detach", context, None)


def attach_text(site: Site, table: str, name: str, **kwargs: Any) -> dict[str, Any]:
    """Attach a text field via FieldInstanceService, asserting success."""
    from fieldhooks.services.instances import FieldInstanceService

    result = FieldInstanceService(site).attach(table, name, "text", **kwargs)
    assert result.ok, result.error
    return result.data
