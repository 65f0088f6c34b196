"""Built-in plugin contributing the ``text`` field handler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fieldhooks.fields.text import TextField
from fieldhooks.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from fieldhooks.fields.base import FieldHandler
    from fieldhooks.infrastructure.site import Site


class TextFieldPlugin:
    """Registers :class:`TextField` wired to the site's collaborators."""

    @hookimpl
    def register_field_handlers(self, site: Site) -> dict[str, FieldHandler]:
        text_config = site.settings.text
        handler = TextField(
            templates=site.templates,
            translator=site.translator,
            hooktags=site.hooktags,
            allowed_tags=text_config.allowed_tags,
            default_processing=text_config.default_processing,
        )
        return {TextField.type_name: handler}
