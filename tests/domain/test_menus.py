"""Tests for menu link threading."""

from __future__ import annotations

from fieldhooks.domain.menus import MenuLink, thread_links


def _link(link_id: int, lft: int, rght: int, parent_id: int | None = None) -> MenuLink:
    return MenuLink(
        id=link_id,
        menu_id=1,
        title=f"L{link_id}",
        url=f"/{link_id}",
        lft=lft,
        rght=rght,
        parent_id=parent_id,
    )


class TestThreadLinks:
    def test_nests_children_in_order(self) -> None:
        links = [
            _link(1, 1, 6),
            _link(2, 2, 3, parent_id=1),
            _link(3, 4, 5, parent_id=1),
            _link(4, 7, 8),
        ]
        roots = thread_links(links)
        assert [r.id for r in roots] == [1, 4]
        assert [c.id for c in roots[0].children] == [2, 3]
        assert roots[0].has_children
        assert not roots[1].has_children

    def test_orphans_become_roots(self) -> None:
        roots = thread_links([_link(5, 3, 4, parent_id=99)])
        assert [r.id for r in roots] == [5]

    def test_rethreading_resets_children(self) -> None:
        links = [_link(1, 1, 4), _link(2, 2, 3, parent_id=1)]
        thread_links(links)
        roots = thread_links(links)
        assert len(roots[0].children) == 1
