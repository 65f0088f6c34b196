"""MenuService — menus, their link trees, and menu block rendering."""

from __future__ import annotations

import logging
from typing import Any

from fieldhooks.domain.menus import Block, MenuLink
from fieldhooks.plugins.builtins.menu import MENU_HANDLER
from fieldhooks.services._helpers import now_iso
from fieldhooks.services.base import BaseService
from fieldhooks.services.result import NOT_FOUND, ServiceResult

logger = logging.getLogger(__name__)


class MenuService(BaseService):
    """Creates menus and links and renders menus as blocks."""

    def create_menu(
        self,
        title: str,
        *,
        description: str = "",
        region: str | None = None,
    ) -> ServiceResult:
        """Create a menu; with *region*, also place a menu block there."""
        created = now_iso()
        block_id: int | None = None
        with self._site.transaction() as conn:
            menu_id = self._site.menus.create_menu(
                conn,
                title=title,
                description=description,
                created=created,
            )
            if region:
                block_id = self._site.menus.create_block(
                    conn,
                    handler=MENU_HANDLER,
                    delta=str(menu_id),
                    region=region,
                    title=title,
                    created=created,
                )
        logger.info("Created menu %s (%s)", menu_id, title)
        return ServiceResult(
            ok=True,
            op="create_menu",
            data={"id": menu_id, "title": title, "block_id": block_id, "region": region},
        )

    def add_link(
        self,
        menu_id: int,
        title: str,
        url: str,
        *,
        parent_id: int | None = None,
        description: str = "",
    ) -> ServiceResult:
        """Append a link as the last child of *parent_id* (or as the last root)."""
        op = "add_link"
        if self._site.menus.get_menu(menu_id) is None:
            return self._menu_not_found(op, menu_id)
        try:
            with self._site.transaction() as conn:
                link_id = self._site.menus.append_link(
                    conn,
                    menu_id=menu_id,
                    title=title,
                    url=url,
                    parent_id=parent_id,
                    description=description,
                )
        except ValueError as exc:
            return ServiceResult.failure(
                op,
                NOT_FOUND,
                str(exc),
                detail={"menu_id": menu_id, "parent_id": parent_id},
            )
        link = self._site.menus.get_link(link_id)
        assert link is not None
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": link.id,
                "menu_id": menu_id,
                "parent_id": parent_id,
                "title": title,
                "url": url,
                "lft": link.lft,
                "rght": link.rght,
            },
        )

    def show(self, menu_id: int) -> ServiceResult:
        """A menu with its threaded link tree."""
        op = "show_menu"
        menu = self._site.menus.get_menu(menu_id)
        if menu is None:
            return self._menu_not_found(op, menu_id)

        def _tree(links: list[MenuLink]) -> list[dict[str, Any]]:
            return [
                {
                    "id": link.id,
                    "title": link.title,
                    "url": link.url,
                    "children": _tree(link.children),
                }
                for link in links
            ]

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": menu.id,
                "title": menu.title,
                "description": menu.description,
                "links": _tree(self._site.menus.threaded_links(menu_id)),
            },
        )

    def render(
        self,
        menu_id: int,
        region: str,
        *,
        view_mode: str | None = None,
    ) -> ServiceResult:
        """Render menu *menu_id* as a block of *region*.

        A stored block for that menu and region is used when present;
        otherwise an unsaved block is rendered.

        Raises:
            TemplateNotFound: If no menu template matches the region and view mode.
        """
        op = "render_menu"
        menu = self._site.menus.get_menu(menu_id)
        if menu is None:
            return self._menu_not_found(op, menu_id)

        blocks = self._site.menus.find_blocks(MENU_HANDLER, str(menu_id))
        stored = [b for b in blocks if b.region == region]
        block = stored[0] if stored else Block(
            id=0,
            handler=MENU_HANDLER,
            delta=str(menu_id),
            region=region,
            title=menu.title,
        )

        view = self._site.view(view_mode=view_mode)
        html = view.render_block(block)
        mode = view.in_use_view_mode()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "menu_id": menu_id,
                "block_id": block.id or None,
                "region": region,
                "view_mode": mode,
                "template": self._site.resolver().cached(region, mode),
                "html": html,
            },
        )

    @staticmethod
    def _menu_not_found(op: str, menu_id: int) -> ServiceResult:
        return ServiceResult.failure(
            op,
            NOT_FOUND,
            f"No menu with id {menu_id}",
            detail={"menu_id": menu_id},
        )
