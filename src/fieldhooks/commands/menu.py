"""Command group: menus and menu blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldhooks.commands._base import FhGroup
from fieldhooks.services.menus import MenuService

if TYPE_CHECKING:
    from fieldhooks.commands._context import AppContext


@click.group(
    cls=FhGroup,
    examples="""\
  fieldhooks menu create "Main menu" --region main-menu
  fieldhooks menu add-link 1 Home /
  fieldhooks menu add-link 1 Team /about/team --parent 2
  fieldhooks menu render 1 --region left-sidebar --view-mode full""",
)
def menu() -> None:
    """Create menus and render them as blocks."""


@menu.command()
@click.argument("title")
@click.option("--description", default="", help="Menu description.")
@click.option("--region", default=None, help="Also place a menu block in this region.")
@click.pass_obj
def create(app: AppContext, title: str, description: str, region: str | None) -> None:
    """Create a menu called TITLE."""
    app.run(
        "create_menu",
        lambda: MenuService(app.site).create_menu(title, description=description, region=region),
    )


@menu.command(name="add-link")
@click.argument("menu_id", type=int)
@click.argument("title")
@click.argument("url")
@click.option("--parent", "parent_id", type=int, default=None, help="Parent link id.")
@click.option("--description", default="", help="Link title attribute.")
@click.pass_obj
def add_link(
    app: AppContext,
    menu_id: int,
    title: str,
    url: str,
    parent_id: int | None,
    description: str,
) -> None:
    """Append a link to MENU_ID (as last child of --parent, or last root)."""
    app.run(
        "add_link",
        lambda: MenuService(app.site).add_link(
            menu_id,
            title,
            url,
            parent_id=parent_id,
            description=description,
        ),
    )


@menu.command()
@click.argument("menu_id", type=int)
@click.pass_obj
def show(app: AppContext, menu_id: int) -> None:
    """Show MENU_ID and its link tree."""
    app.run("show_menu", lambda: MenuService(app.site).show(menu_id))


@menu.command()
@click.argument("menu_id", type=int)
@click.option("--region", required=True, help="Theme region the block is rendered in.")
@click.option("--view-mode", default=None, help="View mode to render with.")
@click.pass_obj
def render(app: AppContext, menu_id: int, region: str, view_mode: str | None) -> None:
    """Render MENU_ID as a block of --region."""
    app.run(
        "render_menu",
        lambda: MenuService(app.site).render(menu_id, region, view_mode=view_mode),
    )
