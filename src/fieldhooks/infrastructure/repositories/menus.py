"""Repository for menus, nested-set menu links, and blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, func, insert, select, update

from fieldhooks.domain.menus import Block, Menu, MenuLink, thread_links
from fieldhooks.infrastructure.database.schema import blocks, menu_links, menus

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine


def _link(row: Any) -> MenuLink:
    return MenuLink(
        id=row["id"],
        menu_id=row["menu_id"],
        title=row["title"],
        url=row["url"],
        lft=row["lft"],
        rght=row["rght"],
        parent_id=row["parent_id"],
        description=row["description"] or "",
        active=bool(row["active"]),
    )


def _block(row: Any) -> Block:
    return Block(
        id=row["id"],
        handler=row["handler"],
        delta=row["delta"],
        region=row["region"],
        title=row["title"] or "",
    )


class MenuRepository:
    """Encapsulates SQL for menus, their link trees, and blocks."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def create_menu(
        self,
        conn: Connection,
        *,
        title: str,
        description: str,
        created: str,
    ) -> int:
        result = conn.execute(
            insert(menus).values(title=title, description=description, created=created)
        )
        assert result.lastrowid is not None
        return result.lastrowid

    def get_menu(self, menu_id: int) -> Menu | None:
        """Load a menu without its links."""
        with self._engine.connect() as conn:
            row = conn.execute(select(menus).where(menus.c.id == menu_id)).mappings().first()
        if row is None:
            return None
        return Menu(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            handler=row["handler"],
        )

    # ------------------------------------------------------------------
    # Links (nested set)
    # ------------------------------------------------------------------

    def get_link(self, link_id: int) -> MenuLink | None:
        with self._engine.connect() as conn:
            row = (
                conn.execute(select(menu_links).where(menu_links.c.id == link_id))
                .mappings()
                .first()
            )
        return _link(row) if row is not None else None

    def flat_links(self, menu_id: int) -> list[MenuLink]:
        """All links of a menu ordered by ascending ``lft``."""
        stmt = select(menu_links).where(menu_links.c.menu_id == menu_id).order_by(menu_links.c.lft)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_link(row) for row in rows]

    def threaded_links(self, menu_id: int) -> list[MenuLink]:
        """Root links of a menu with ``children`` nested, siblings by ``lft``."""
        return thread_links(self.flat_links(menu_id))

    def append_link(
        self,
        conn: Connection,
        *,
        menu_id: int,
        title: str,
        url: str,
        parent_id: int | None = None,
        description: str = "",
    ) -> int:
        """Insert a link as the last child of *parent_id* (or last root).

        Shifts the nested set to open a two-slot gap at the insertion point.

        Raises:
            ValueError: If *parent_id* is not a link of *menu_id*.
        """
        if parent_id is None:
            max_rght = conn.execute(
                select(func.max(menu_links.c.rght)).where(menu_links.c.menu_id == menu_id)
            ).scalar_one_or_none()
            lft = (max_rght or 0) + 1
        else:
            parent = (
                conn.execute(
                    select(menu_links.c.rght).where(
                        menu_links.c.id == parent_id,
                        menu_links.c.menu_id == menu_id,
                    )
                )
                .mappings()
                .first()
            )
            if parent is None:
                msg = f"Parent link {parent_id} does not belong to menu {menu_id}"
                raise ValueError(msg)
            lft = parent["rght"]
            conn.execute(
                update(menu_links)
                .where(and_(menu_links.c.menu_id == menu_id, menu_links.c.rght >= lft))
                .values(rght=menu_links.c.rght + 2)
            )
            conn.execute(
                update(menu_links)
                .where(and_(menu_links.c.menu_id == menu_id, menu_links.c.lft > lft))
                .values(lft=menu_links.c.lft + 2)
            )

        result = conn.execute(
            insert(menu_links).values(
                menu_id=menu_id,
                parent_id=parent_id,
                lft=lft,
                rght=lft + 1,
                title=title,
                url=url,
                description=description,
            )
        )
        assert result.lastrowid is not None
        return result.lastrowid

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def create_block(
        self,
        conn: Connection,
        *,
        handler: str,
        delta: str,
        region: str,
        title: str,
        created: str,
    ) -> int:
        result = conn.execute(
            insert(blocks).values(
                handler=handler,
                delta=delta,
                region=region,
                title=title,
                created=created,
            )
        )
        assert result.lastrowid is not None
        return result.lastrowid

    def find_blocks(self, handler: str, delta: str) -> list[Block]:
        stmt = (
            select(blocks)
            .where(blocks.c.handler == handler, blocks.c.delta == delta)
            .order_by(blocks.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_block(row) for row in rows]
