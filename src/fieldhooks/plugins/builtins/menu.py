"""Built-in plugin rendering ``Menu`` blocks.

The element is chosen by the site's template resolver from the block's
region and the view's in-use view mode, so a theme can ship
``render_menu_left-sidebar_full.html`` to restyle only that combination.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fieldhooks.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from fieldhooks.domain.menus import Block
    from fieldhooks.infrastructure.view import View

logger = logging.getLogger(__name__)

MENU_HANDLER = "Menu"


class MenuHook:
    """Answers ``display_block`` for blocks whose handler is ``Menu``."""

    @hookimpl
    def display_block(self, view: View, block: Block, options: dict[str, Any]) -> str | None:
        if block.handler != MENU_HANDLER:
            return None

        site = view.site
        template_id = site.resolver().resolve(block.region, view.in_use_view_mode())

        try:
            menu_id = int(block.delta)
        except ValueError:
            logger.warning("Menu block %s has non-numeric delta %r", block.id, block.delta)
            return ""
        menu = site.menus.get_menu(menu_id)
        if menu is None:
            logger.warning("Menu block %s points at missing menu %s", block.id, menu_id)
            return ""
        menu.links = site.menus.threaded_links(menu_id)

        return view.element(template_id, {"menu": menu, "block": block, "options": options})
