"""SQLite database engine and schema via SQLAlchemy Core."""

from fieldhooks.infrastructure.database.engine import create_db_engine, init_database
from fieldhooks.infrastructure.database.schema import (
    blocks,
    field_instances,
    field_values,
    menu_links,
    menus,
    metadata,
)

__all__ = [
    "blocks",
    "create_db_engine",
    "field_instances",
    "field_values",
    "init_database",
    "menu_links",
    "menus",
    "metadata",
]
