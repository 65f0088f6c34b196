"""Menu, menu-link and block value types.

Menu links form a nested set: a link's descendants are exactly the links
whose ``lft`` lies strictly between its ``lft`` and ``rght``. Threading
(:func:`thread_links`) turns the flat, ``lft``-ordered rows into a tree
where siblings keep ascending ``lft`` order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class MenuLink:
    id: int
    menu_id: int
    title: str
    url: str
    lft: int
    rght: int
    parent_id: int | None = None
    description: str = ""
    active: bool = True
    children: list[MenuLink] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)


@dataclass
class Menu:
    id: int
    title: str
    description: str = ""
    handler: str = "Menu"
    links: list[MenuLink] = field(default_factory=list)


@dataclass(frozen=True)
class Block:
    """A renderable block placed in a theme region.

    ``handler`` names the plugin that renders it; ``delta`` identifies the
    handler-specific object (for menu blocks, the menu id).
    """

    id: int
    handler: str
    delta: str
    region: str
    title: str = ""


def thread_links(links: Iterable[MenuLink]) -> list[MenuLink]:
    """Nest *links* under their parents, preserving input order.

    Links whose parent is absent from *links* become roots. Feed rows
    ordered by ascending ``lft`` to get children in tree order.
    """
    ordered = list(links)
    by_id = {link.id: link for link in ordered}
    roots: list[MenuLink] = []
    for link in ordered:
        link.children = []
    for link in ordered:
        parent = by_id.get(link.parent_id) if link.parent_id is not None else None
        if parent is None:
            roots.append(link)
        else:
            parent.children.append(link)
    return roots
