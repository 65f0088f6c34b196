"""Subcommand modules for fieldhooks.

:func:`register_commands` imports lazily so ``fieldhooks --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    from fieldhooks.commands.entity import entity
    from fieldhooks.commands.field import field
    from fieldhooks.commands.menu import menu
    from fieldhooks.commands.types import types

    cli.add_command(field)
    cli.add_command(entity)
    cli.add_command(menu)
    cli.add_command(types)
