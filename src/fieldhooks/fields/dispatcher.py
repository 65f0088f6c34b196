"""Lifecycle dispatcher — route a phase to the field's handler.

INVARIANT: The dispatcher never catches handler errors and never retries.
An unknown field type raises :class:`UnknownFieldType` straight through.

Return-value normalization by phase kind:

- gate: ``bool``; ``None`` from the handler counts as continue.
- notification: always ``None``, whatever the handler returned.
- render / describe: the handler's value unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fieldhooks.domain.fields import InvocationContext, PreconditionVeto
from fieldhooks.domain.phases import LifecyclePhase, PhaseKind, is_gate, kind_of

if TYPE_CHECKING:
    from fieldhooks.domain.fields import FieldDefinition
    from fieldhooks.fields.registry import FieldHandlerRegistry

logger = logging.getLogger(__name__)

ContextFactory = Callable[["FieldDefinition"], InvocationContext]


class LifecycleDispatcher:
    """Invokes handler methods for lifecycle phases."""

    def __init__(self, registry: FieldHandlerRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> FieldHandlerRegistry:
        return self._registry

    def invoke(
        self,
        phase: LifecyclePhase,
        field: FieldDefinition,
        context: InvocationContext | None = None,
    ) -> Any:
        """Call the handler method for *phase* on *field*'s handler.

        When *context* is omitted a bare one holding only *field* is used.
        """
        handler = self._registry.resolve(field.type)
        ctx = context if context is not None else InvocationContext(field=field)
        method = getattr(handler, phase.value)

        logger.debug(
            "Dispatching %s to %s field %s",
            phase.value,
            field.type,
            field.name,
        )
        result = method(ctx)

        kind = kind_of(phase)
        if kind is PhaseKind.GATE:
            return result is not False
        if kind is PhaseKind.NOTIFICATION:
            return None
        return result

    def check(
        self,
        phase: LifecyclePhase,
        field: FieldDefinition,
        context: InvocationContext | None = None,
    ) -> PreconditionVeto | None:
        """Run a gate phase and return a veto record if the handler refused.

        Raises:
            ValueError: If *phase* is not a gate phase.
        """
        if not is_gate(phase):
            msg = f"Phase {phase.value!r} is not a gate phase"
            raise ValueError(msg)
        if self.invoke(phase, field, context):
            return None
        veto = PreconditionVeto(phase=phase, field_name=field.name, type_name=field.type)
        logger.info("%s", veto.message)
        return veto

    def check_all(
        self,
        phase: LifecyclePhase,
        fields: list[FieldDefinition],
        context_factory: ContextFactory | None = None,
    ) -> PreconditionVeto | None:
        """Run a gate phase over *fields* in order, stopping at the first veto.

        *context_factory*, if given, builds the context for each field.
        """
        for field in fields:
            ctx = context_factory(field) if context_factory is not None else None
            veto = self.check(phase, field, ctx)
            if veto is not None:
                return veto
        return None

    def notify_all(
        self,
        phase: LifecyclePhase,
        fields: list[FieldDefinition],
        context_factory: ContextFactory | None = None,
    ) -> None:
        """Run a notification phase over every field in *fields*."""
        for field in fields:
            ctx = context_factory(field) if context_factory is not None else None
            self.invoke(phase, field, ctx)
