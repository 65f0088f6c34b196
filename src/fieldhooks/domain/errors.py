"""Error taxonomy.

Configuration errors (unknown field type, missing template, invalid
handler settings) are exceptions and abort the current request.
Validation failures and vetoes are data, not faults: see
:class:`fieldhooks.domain.validation.ValidationFailed` and
:class:`fieldhooks.domain.fields.PreconditionVeto`.
"""

from __future__ import annotations


class FieldhooksError(Exception):
    """Base class for all fieldhooks errors."""


class UnknownFieldType(FieldhooksError, LookupError):
    """No handler is registered for a field type."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"No field handler registered for type {type_name!r}")


class TemplateNotFound(FieldhooksError, LookupError):
    """Every candidate template for a rendering context was missing."""

    def __init__(self, candidates: list[str] | tuple[str, ...]) -> None:
        self.candidates = tuple(candidates)
        tried = ", ".join(self.candidates) or "<none>"
        super().__init__(f"No template found; tried: {tried}")


class InvalidFieldSettings(FieldhooksError, ValueError):
    """A field's ``metadata.settings`` failed its handler's schema."""

    def __init__(self, field_name: str, type_name: str, reason: str) -> None:
        self.field_name = field_name
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"Invalid settings for {type_name!r} field {field_name!r}: {reason}")
