"""Field model — definitions, handler descriptors and invocation context.

A :class:`FieldDefinition` is one field instance attached to a table,
together with the value it holds for the entity currently being
processed. Its ``metadata.settings`` blob is opaque here: each handler
owns the schema and validates it through its own settings model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fieldhooks.domain.phases import LifecyclePhase
    from fieldhooks.domain.validation import Validator


class FieldMetadata(BaseModel):
    """Per-instance configuration shared by every entity of a table."""

    required: bool = False
    description: str = ""
    settings: dict[str, Any] = Field(default_factory=dict)


class FieldDefinition(BaseModel):
    """A field instance plus the value it currently holds.

    Attributes:
        name: Machine name, unique per owning table.
        type: Handler type name (selects the field handler).
        label: Human readable label.
        table: Alias of the owning table.
        metadata: Required flag, description and handler settings.
        value: Current content; mutated in place by handlers.
        instance_id: Storage id of the attached instance, once attached.
    """

    name: str
    type: str
    label: str = ""
    table: str = ""
    metadata: FieldMetadata = Field(default_factory=FieldMetadata)
    value: Any = None
    instance_id: int | None = None

    @property
    def path(self) -> str:
        """Validator path for this field (``:name``)."""
        return f":{self.name}"


class HandlerDescriptor(BaseModel):
    """Static self-description returned by a handler's ``info`` phase."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    hidden: bool = False


@dataclass
class InvocationContext:
    """Bag handed to a handler method for one phase invocation.

    Only ``field`` is always present; the remaining members are filled
    according to the phase (``validator`` for validation phases, ``post``
    for after-save, ``table`` for attach/detach, ``view`` for rendering).
    """

    field: FieldDefinition
    entity: Any = None
    view: Any = None
    validator: Validator | None = None
    post: Any = None
    table: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PreconditionVeto:
    """A gate phase returned ``False`` and the enclosing operation must stop."""

    phase: LifecyclePhase
    field_name: str
    type_name: str

    @property
    def message(self) -> str:
        return f"{self.phase.value} vetoed by {self.type_name!r} field {self.field_name!r}"
