"""Tests for MenuRepository nested-set links and blocks."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from fieldhooks.infrastructure.database.engine import init_database
from fieldhooks.infrastructure.repositories.menus import MenuRepository

NOW = "2026-01-01T00:00:00+00:00"


@pytest.fixture
def engine(tmp_path: Path) -> Engine:
    engine = init_database(tmp_path)
    yield engine
    engine.dispose()


@pytest.fixture
def repo(engine: Engine) -> MenuRepository:
    return MenuRepository(engine)


@pytest.fixture
def menu_id(engine: Engine, repo: MenuRepository) -> int:
    with engine.begin() as conn:
        return repo.create_menu(conn, title="Main", description="Top nav", created=NOW)


def _add(
    engine: Engine,
    repo: MenuRepository,
    menu_id: int,
    title: str,
    parent: int | None = None,
) -> int:
    with engine.begin() as conn:
        return repo.append_link(
            conn, menu_id=menu_id, title=title, url=f"/{title}", parent_id=parent
        )


class TestMenus:
    def test_get_menu(self, repo: MenuRepository, menu_id: int) -> None:
        menu = repo.get_menu(menu_id)
        assert menu is not None
        assert menu.title == "Main"
        assert menu.description == "Top nav"
        assert menu.handler == "Menu"
        assert repo.get_menu(menu_id + 1) is None


class TestLinks:
    def test_roots_append_after_each_other(
        self, engine: Engine, repo: MenuRepository, menu_id: int
    ) -> None:
        _add(engine, repo, menu_id, "a")
        _add(engine, repo, menu_id, "b")
        assert [(link.lft, link.rght) for link in repo.flat_links(menu_id)] == [(1, 2), (3, 4)]

    def test_child_opens_gap(self, engine: Engine, repo: MenuRepository, menu_id: int) -> None:
        a = _add(engine, repo, menu_id, "a")
        _add(engine, repo, menu_id, "b")
        _add(engine, repo, menu_id, "a1", parent=a)
        spans = {link.title: (link.lft, link.rght) for link in repo.flat_links(menu_id)}
        assert spans == {"a": (1, 4), "a1": (2, 3), "b": (5, 6)}

    def test_threaded(self, engine: Engine, repo: MenuRepository, menu_id: int) -> None:
        a = _add(engine, repo, menu_id, "a")
        _add(engine, repo, menu_id, "a1", parent=a)
        _add(engine, repo, menu_id, "a2", parent=a)
        roots = repo.threaded_links(menu_id)
        assert [r.title for r in roots] == ["a"]
        assert [c.title for c in roots[0].children] == ["a1", "a2"]

    def test_parent_from_other_menu_rejected(
        self, engine: Engine, repo: MenuRepository, menu_id: int
    ) -> None:
        with engine.begin() as conn:
            other = repo.create_menu(conn, title="Other", description="", created=NOW)
        foreign = _add(engine, repo, other, "x")
        with pytest.raises(ValueError, match="does not belong"):
            _add(engine, repo, menu_id, "y", parent=foreign)

    def test_get_link(self, engine: Engine, repo: MenuRepository, menu_id: int) -> None:
        link_id = _add(engine, repo, menu_id, "a")
        link = repo.get_link(link_id)
        assert link is not None
        assert link.url == "/a"
        assert link.active is True


class TestBlocks:
    def test_create_and_find(self, engine: Engine, repo: MenuRepository, menu_id: int) -> None:
        with engine.begin() as conn:
            block_id = repo.create_block(
                conn,
                handler="Menu",
                delta=str(menu_id),
                region="main-menu",
                title="Main",
                created=NOW,
            )
        blocks = repo.find_blocks("Menu", str(menu_id))
        assert [b.id for b in blocks] == [block_id]
        assert blocks[0].region == "main-menu"
        assert repo.find_blocks("Menu", "999") == []
