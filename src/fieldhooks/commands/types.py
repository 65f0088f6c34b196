"""Command: list registered field types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldhooks.commands._base import FhCommand

if TYPE_CHECKING:
    from fieldhooks.commands._context import AppContext


@click.command(
    cls=FhCommand,
    examples="""\
  fieldhooks types
  fieldhooks types --all
  fieldhooks --json types""",
)
@click.option("--all", "include_hidden", is_flag=True, help="Include hidden field types.")
@click.pass_obj
def types(app: AppContext, include_hidden: bool) -> None:
    """List the field types plugins have registered."""
    from fieldhooks.services.instances import FieldInstanceService

    service = FieldInstanceService(app.site)
    app.run("list_types", lambda: service.list_types(include_hidden=include_hidden))
