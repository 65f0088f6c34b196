"""Command group: save, show and delete entity field values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldhooks.commands._base import FhGroup, parse_assignments
from fieldhooks.services.entities import EntityFieldService

if TYPE_CHECKING:
    from fieldhooks.commands._context import AppContext


@click.group(
    cls=FhGroup,
    examples="""\
  fieldhooks entity save articles 1 --value body='Hello world'
  fieldhooks entity show articles 1
  fieldhooks entity show articles 1 --raw
  fieldhooks entity delete articles 1""",
)
def entity() -> None:
    """Work with the field values of one entity."""


@entity.command()
@click.argument("table")
@click.argument("entity_id")
@click.option(
    "--value",
    "values",
    multiple=True,
    metavar="NAME=VALUE",
    help="Field value (repeatable).",
)
@click.pass_obj
def save(app: AppContext, table: str, entity_id: str, values: tuple[str, ...]) -> None:
    """Validate and store field values of ENTITY_ID in TABLE."""
    post = parse_assignments(values, option="--value")
    app.run("save_entity", lambda: EntityFieldService(app.site).save(table, entity_id, post))


@entity.command()
@click.argument("table")
@click.argument("entity_id")
@click.option("--view-mode", default=None, help="View mode to render with.")
@click.option("--raw", is_flag=True, help="Show stored values instead of rendered markup.")
@click.option("--edit", "edit_form", is_flag=True, help="Render the edit form instead.")
@click.pass_obj
def show(
    app: AppContext,
    table: str,
    entity_id: str,
    view_mode: str | None,
    raw: bool,
    edit_form: bool,
) -> None:
    """Render the fields of ENTITY_ID in TABLE."""
    service = EntityFieldService(app.site)
    if raw:
        app.run("get_entity", lambda: service.get(table, entity_id))
    elif edit_form:
        app.run("edit_entity", lambda: service.edit(table, entity_id))
    else:
        app.run("display_entity", lambda: service.display(table, entity_id, view_mode=view_mode))


@entity.command()
@click.argument("table")
@click.argument("entity_id")
@click.pass_obj
def delete(app: AppContext, table: str, entity_id: str) -> None:
    """Delete every field value of ENTITY_ID in TABLE."""
    app.run("delete_entity", lambda: EntityFieldService(app.site).delete(table, entity_id))
