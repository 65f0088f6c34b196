"""Repositories encapsulating SQL for fields, values, menus and blocks."""

from fieldhooks.infrastructure.repositories.fields import FieldRepository
from fieldhooks.infrastructure.repositories.menus import MenuRepository

__all__ = ["FieldRepository", "MenuRepository"]
