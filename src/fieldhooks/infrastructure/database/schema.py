"""SQLAlchemy Core table definitions for the fieldhooks database.

Field instances are attached per table alias; their values are stored
per entity. Menus keep their links as a nested set (``lft``/``rght``)
with an explicit ``parent_id`` for threading.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

field_instances = Table(
    "field_instances",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("table_alias", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("handler", Text, nullable=False),
    Column("label", Text, nullable=False, default="", server_default=""),
    Column("required", Integer, default=0, server_default="0"),
    Column("description", Text, default="", server_default=""),
    Column("settings", Text, nullable=False, default="{}", server_default="{}"),  # JSON
    Column("ordering", Integer, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    UniqueConstraint("table_alias", "name"),
)

field_values = Table(
    "field_values",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "instance_id",
        Integer,
        ForeignKey("field_instances.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("table_alias", Text, nullable=False),
    Column("entity_id", Text, nullable=False),
    Column("value", Text),
    Column("modified", Text, nullable=False),
    UniqueConstraint("instance_id", "entity_id"),
)

menus = Table(
    "menus",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("description", Text, default="", server_default=""),
    Column("handler", Text, nullable=False, default="Menu", server_default="Menu"),
    Column("created", Text, nullable=False),
)

menu_links = Table(
    "menu_links",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("menu_id", Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False),
    Column("parent_id", Integer),
    Column("lft", Integer, nullable=False),
    Column("rght", Integer, nullable=False),
    Column("title", Text, nullable=False),
    Column("url", Text, nullable=False),
    Column("description", Text, default="", server_default=""),
    Column("active", Integer, default=1, server_default="1"),
)

blocks = Table(
    "blocks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("handler", Text, nullable=False),
    Column("delta", Text, nullable=False),
    Column("region", Text, nullable=False),
    Column("title", Text, default="", server_default=""),
    Column("created", Text, nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_field_values_entity", field_values.c.table_alias, field_values.c.entity_id)
Index("ix_menu_links_menu_lft", menu_links.c.menu_id, menu_links.c.lft)
Index("ix_blocks_handler_delta", blocks.c.handler, blocks.c.delta)
