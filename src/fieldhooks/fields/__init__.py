"""Field handler core — handler base class, registry, and dispatcher."""

from fieldhooks.fields.base import FieldHandler
from fieldhooks.fields.dispatcher import LifecycleDispatcher
from fieldhooks.fields.registry import FieldHandlerRegistry

__all__ = ["FieldHandler", "FieldHandlerRegistry", "LifecycleDispatcher"]
