"""Pluggy hook specifications for fieldhooks extensions.

Two setup-time hooks let plugins contribute field handlers and hooktags.
Three render-time hooks let plugins answer block and object rendering
requests and alter element data before it reaches a template.

Field handlers themselves are not called through pluggy: once registered
they are invoked directly by the lifecycle dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from fieldhooks.domain.menus import Block
    from fieldhooks.fields.base import FieldHandler
    from fieldhooks.infrastructure.hooktags import Hooktag
    from fieldhooks.infrastructure.site import Site
    from fieldhooks.infrastructure.view import View

PROJECT_NAME = "fieldhooks"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FieldhooksHookSpec:
    """Hook specifications for the fieldhooks plugin system."""

    @hookspec
    def register_field_handlers(self, site: Site) -> dict[str, FieldHandler] | None:
        """Return type name -> handler instances to add to the registry."""

    @hookspec
    def register_hooktags(self, site: Site) -> dict[str, Hooktag] | None:
        """Return hooktag name -> callable mappings for the expander."""

    @hookspec(firstresult=True)
    def display_block(self, view: View, block: Block, options: dict[str, Any]) -> str | None:
        """Render *block*; return None to let another plugin answer."""

    @hookspec(firstresult=True)
    def render_object(self, view: View, obj: object, args: tuple[Any, ...]) -> str | None:
        """Render an arbitrary object passed to ``View.render``."""

    @hookspec
    def alter_element(self, view: View, name: str, data: dict[str, Any]) -> None:
        """Mutate *data* in place before element *name* is rendered."""
