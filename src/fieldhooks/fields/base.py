"""FieldHandler — the capability set every field type implements.

One handler instance serves every field of its type. Methods receive an
:class:`InvocationContext` and either return markup, return a
continue/veto boolean, or mutate ``context.field.value`` in place.

Baselines: gate phases continue, notification phases do nothing,
``formatter`` and ``settings`` render nothing. Subclasses must provide
``info``, ``display`` and ``edit``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ValidationError

from fieldhooks.domain.errors import InvalidFieldSettings

if TYPE_CHECKING:
    from fieldhooks.domain.fields import FieldDefinition, HandlerDescriptor, InvocationContext


class FieldHandler(ABC):
    """Base class for field handlers."""

    #: Registry key, e.g. ``"text"``.
    type_name: ClassVar[str] = ""

    #: Schema for ``metadata.settings``; ``None`` accepts anything.
    settings_model: ClassVar[type[BaseModel] | None] = None

    def configure(self, field: FieldDefinition) -> BaseModel | None:
        """Validate *field*'s settings against :attr:`settings_model`.

        Raises:
            InvalidFieldSettings: If the settings do not match the schema.
        """
        if self.settings_model is None:
            return None
        try:
            return self.settings_model.model_validate(field.metadata.settings)
        except ValidationError as exc:
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidFieldSettings(field.name, field.type, reason) from exc

    # ------------------------------------------------------------------
    # Instance phases
    # ------------------------------------------------------------------

    @abstractmethod
    def info(self, context: InvocationContext) -> HandlerDescriptor:
        """Describe this handler (name, description, hidden)."""

    def settings(self, context: InvocationContext) -> str:
        """Render the instance settings form fragment."""
        return ""

    def before_attach(self, context: InvocationContext) -> bool | None:
        return True

    def after_attach(self, context: InvocationContext) -> None:
        return None

    def before_detach(self, context: InvocationContext) -> bool | None:
        return True

    def after_detach(self, context: InvocationContext) -> None:
        return None

    # ------------------------------------------------------------------
    # Entity phases
    # ------------------------------------------------------------------

    @abstractmethod
    def display(self, context: InvocationContext) -> str:
        """Render the field's value for viewing."""

    @abstractmethod
    def edit(self, context: InvocationContext) -> str:
        """Render the field's form elements."""

    def formatter(self, context: InvocationContext) -> str:
        return ""

    def before_find(self, context: InvocationContext) -> bool | None:
        return True

    def before_validate(self, context: InvocationContext) -> bool | None:
        return True

    def after_validate(self, context: InvocationContext) -> bool | None:
        return True

    def after_save(self, context: InvocationContext) -> None:
        """Copy the submitted value onto the field."""
        context.field.value = context.post

    def before_delete(self, context: InvocationContext) -> bool | None:
        return True

    def after_delete(self, context: InvocationContext) -> None:
        return None
