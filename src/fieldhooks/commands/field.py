"""Command group: attach, detach and inspect field instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldhooks.commands._base import FhGroup, parse_assignments
from fieldhooks.services.instances import FieldInstanceService

if TYPE_CHECKING:
    from fieldhooks.commands._context import AppContext


@click.group(
    cls=FhGroup,
    examples="""\
  fieldhooks field attach articles body --type text --required
  fieldhooks field attach articles summary --type text --set type=text --set max_len=120
  fieldhooks field list articles
  fieldhooks field detach articles summary""",
)
def field() -> None:
    """Manage the fields attached to a table."""


@field.command(
    examples="""\
  fieldhooks field attach articles body --type text
  fieldhooks field attach articles code --type text --set type=text \\
      --set 'validation_rule=/^[A-Z]{3}$/' --set 'validation_message=Three capitals.'""",
)
@click.argument("table")
@click.argument("name")
@click.option("--type", "type_name", required=True, help="Field type (see `fieldhooks types`).")
@click.option("--label", default=None, help="Human readable label.")
@click.option("--required", is_flag=True, help="Reject empty values.")
@click.option("--description", default="", help="Help text shown below the input.")
@click.option(
    "--set",
    "settings",
    multiple=True,
    metavar="KEY=VALUE",
    help="Handler setting (repeatable).",
)
@click.pass_obj
def attach(
    app: AppContext,
    table: str,
    name: str,
    type_name: str,
    label: str | None,
    required: bool,
    description: str,
    settings: tuple[str, ...],
) -> None:
    """Attach a NAME field of the given type to TABLE."""
    parsed = parse_assignments(settings, option="--set", decode_json=True)
    app.run(
        "attach_field",
        lambda: FieldInstanceService(app.site).attach(
            table,
            name,
            type_name,
            label=label,
            required=required,
            description=description,
            settings=parsed,
        ),
    )


@field.command()
@click.argument("table")
@click.argument("name")
@click.pass_obj
def detach(app: AppContext, table: str, name: str) -> None:
    """Detach field NAME from TABLE, deleting its stored values."""
    app.run("detach_field", lambda: FieldInstanceService(app.site).detach(table, name))


@field.command(name="list")
@click.argument("table")
@click.pass_obj
def list_cmd(app: AppContext, table: str) -> None:
    """List the fields attached to TABLE."""
    app.run("list_fields", lambda: FieldInstanceService(app.site).list_instances(table))


@field.command()
@click.argument("table")
@click.argument("name")
@click.option("--formatter", is_flag=True, help="Render the display-formatter form instead.")
@click.pass_obj
def settings(app: AppContext, table: str, name: str, formatter: bool) -> None:
    """Render the settings form of field NAME on TABLE."""
    service = FieldInstanceService(app.site)
    if formatter:
        app.run("field_formatter", lambda: service.formatter_form(table, name))
    else:
        app.run("field_settings", lambda: service.settings_form(table, name))
