"""Field handler registry — type name to handler instance.

Registration happens at startup (built-ins, then plugins); lookups are
read-only afterwards, so no locking is needed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from fieldhooks.domain.errors import UnknownFieldType
from fieldhooks.domain.fields import FieldDefinition, InvocationContext

if TYPE_CHECKING:
    from fieldhooks.domain.fields import HandlerDescriptor
    from fieldhooks.fields.base import FieldHandler

logger = logging.getLogger(__name__)


class HandlerListing:
    """Lazy, restartable view of ``(type_name, descriptor)`` pairs.

    Each iteration walks a snapshot of the registry taken when the
    iteration starts, in registration order, asking each handler for its
    descriptor only as the pair is reached.
    """

    def __init__(self, registry: FieldHandlerRegistry) -> None:
        self._registry = registry

    def __iter__(self) -> Iterator[tuple[str, HandlerDescriptor]]:
        for type_name, handler in self._registry.items():
            probe = FieldDefinition(name=f"_{type_name}_info", type=type_name)
            yield type_name, handler.info(InvocationContext(field=probe))

    def __len__(self) -> int:
        return len(self._registry)


class FieldHandlerRegistry:
    """Maps field type names to handler instances."""

    def __init__(self) -> None:
        self._handlers: dict[str, FieldHandler] = {}

    def register(self, type_name: str, handler: FieldHandler) -> None:
        """Register *handler* for *type_name*, replacing any previous one.

        Re-registering keeps the name's original position in listings.
        """
        normalized = type_name.strip()
        if not normalized:
            msg = "Field type name must not be empty"
            raise ValueError(msg)
        if normalized in self._handlers:
            logger.debug("Replacing field handler for type %s", normalized)
        self._handlers[normalized] = handler
        logger.debug("Registered field handler %s -> %s", normalized, type(handler).__name__)

    def resolve(self, type_name: str) -> FieldHandler:
        """Return the handler for *type_name*.

        Raises:
            UnknownFieldType: If nothing is registered under that name.
        """
        try:
            return self._handlers[type_name]
        except KeyError:
            raise UnknownFieldType(type_name) from None

    def list_handlers(self) -> HandlerListing:
        """Lazy sequence of ``(type_name, descriptor)`` in registration order."""
        return HandlerListing(self)

    def items(self) -> list[tuple[str, FieldHandler]]:
        """Snapshot of ``(type_name, handler)`` pairs."""
        return list(self._handlers.items())

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
