"""Jinja2 template loading with per-site override support.

Template ids follow the ``Plugin.element_name`` convention; they map to
``plugin/element_name.html`` (plugin lower-cased). Ids without a plugin
prefix map to ``element_name.html``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from fieldhooks.domain.errors import TemplateNotFound

TEMPLATE_SUFFIX = ".html"


def build_template_environment(*, override_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with site overrides before packaged defaults."""
    loaders: list[BaseLoader] = []
    if override_dir is not None:
        loaders.append(FileSystemLoader(str(override_dir)))

    loaders.append(PackageLoader("fieldhooks", "templates"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=jinja2.select_autoescape(["html"]),
        keep_trailing_newline=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def template_path(template_id: str) -> str:
    """Map a ``Plugin.element`` id to its template file path."""
    plugin, sep, name = template_id.partition(".")
    if not sep:
        return f"{template_id}{TEMPLATE_SUFFIX}"
    return f"{plugin.lower()}/{name}{TEMPLATE_SUFFIX}"


class TemplateEngine:
    """Narrow rendering interface over a Jinja2 environment."""

    def __init__(self, environment: Environment) -> None:
        self._env = environment

    @property
    def environment(self) -> Environment:
        return self._env

    def exists(self, template_id: str) -> bool:
        """Whether a template file exists for *template_id*."""
        try:
            self._env.get_template(template_path(template_id))
        except jinja2.TemplateNotFound:
            return False
        return True

    def render(self, template_id: str, data: dict[str, Any] | None = None) -> str:
        """Render *template_id* with *data*.

        Raises:
            TemplateNotFound: If no template file exists for the id.
        """
        try:
            template = self._env.get_template(template_path(template_id))
        except jinja2.TemplateNotFound:
            raise TemplateNotFound([template_id]) from None
        return template.render(**(data or {}))
