"""Text field handler.

Stores plain text from text inputs and textareas. Display runs the value
through the text-processing pipeline selected by ``text_processing``;
validation registers up to three rules, always in this order:

1. ``validate_required`` when the instance is required.
2. ``validate_len`` for ``type="text"`` with a positive ``max_len``.
3. ``validate_reg`` when a ``validation_rule`` pattern is configured.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, cast

from fieldhooks.domain.fields import HandlerDescriptor
from fieldhooks.domain.text import TextProcessing, TextSettings, is_filled, matches, within_length
from fieldhooks.domain.textproc import process
from fieldhooks.domain.validation import ValidationRule
from fieldhooks.fields.base import FieldHandler

if TYPE_CHECKING:
    from fieldhooks.domain.fields import FieldDefinition, InvocationContext
    from fieldhooks.infrastructure.hooktags import HooktagExpander
    from fieldhooks.infrastructure.templates import TemplateEngine
    from fieldhooks.infrastructure.translation import Translator

DOMAIN = "field"


class TextField(FieldHandler):
    """Handler for ``text`` fields."""

    type_name = "text"
    settings_model = TextSettings

    def __init__(
        self,
        *,
        templates: TemplateEngine,
        translator: Translator,
        hooktags: HooktagExpander,
        allowed_tags: Iterable[str] | None = None,
        default_processing: TextProcessing = "plain",
    ) -> None:
        self._templates = templates
        self._t = translator.translate
        self._hooktags = hooktags
        self._allowed_tags = tuple(allowed_tags) if allowed_tags is not None else None
        self._default_processing = default_processing

    def text_settings(self, field: FieldDefinition) -> TextSettings:
        """Typed settings for *field* (raises ``InvalidFieldSettings``)."""
        return cast(TextSettings, self.configure(field))

    def _element(self, context: InvocationContext, template_id: str) -> str:
        data: dict[str, Any] = {"field": context.field, "options": context.options}
        if context.view is not None:
            return context.view.element(template_id, data)
        return self._templates.render(template_id, data)

    # ------------------------------------------------------------------
    # Instance phases
    # ------------------------------------------------------------------

    def info(self, context: InvocationContext) -> HandlerDescriptor:
        return HandlerDescriptor(
            name=self._t(DOMAIN, "Text"),
            description=self._t(DOMAIN, "Allow to store text data in database."),
            hidden=False,
        )

    def settings(self, context: InvocationContext) -> str:
        """Settings are shared by every entity of the table the field is attached to."""
        return self._element(context, "Field.text_field_settings")

    # ------------------------------------------------------------------
    # Entity phases
    # ------------------------------------------------------------------

    def display(self, context: InvocationContext) -> str:
        field = context.field
        settings = self.text_settings(field)
        mode = settings.text_processing
        if "text_processing" not in field.metadata.settings:
            mode = self._default_processing
        field.value = process(
            field.value,
            mode,
            allowed_tags=self._allowed_tags,
        )
        return self._element(context, "Field.text_field_display")

    def edit(self, context: InvocationContext) -> str:
        return self._element(context, "Field.text_field_edit")

    def formatter(self, context: InvocationContext) -> str:
        return self._element(context, "Field.text_field_formatter")

    def before_validate(self, context: InvocationContext) -> bool:
        validator = context.validator
        if validator is None:
            msg = "before_validate requires a validator in the invocation context"
            raise ValueError(msg)

        field = context.field
        settings = self.text_settings(field)
        path = field.path

        if field.metadata.required:
            message = self._t(DOMAIN, "Field required.")
            decode = settings.type == "textarea"
            validator.allow_empty(path, False, message).add(
                path,
                ValidationRule(
                    "validate_required",
                    lambda value, _ctx: is_filled(value, decode_entities=decode),
                    message,
                ),
            )
        else:
            validator.allow_empty(path, True)

        if settings.type == "text" and settings.max_len > 0:
            max_len = settings.max_len
            validator.add(
                path,
                ValidationRule(
                    "validate_len",
                    lambda value, _ctx: within_length(value, max_len),
                    self._t(DOMAIN, "Max. %s characters length.", max_len),
                ),
            )

        if settings.validation_rule:
            if settings.validation_message:
                message = self._hooktags.expand(settings.validation_message)
            else:
                message = self._t(DOMAIN, "Invalid field.")
            rule = settings.validation_rule
            validator.add(
                path,
                ValidationRule(
                    "validate_reg",
                    lambda value, _ctx: matches(value, rule),
                    message,
                ),
            )

        return True
