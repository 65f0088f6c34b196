"""View — template rendering with plugin hooks.

A View is created per rendering request. On top of plain template
rendering it adds:

- object rendering: ``view.render(obj)`` asks plugins for markup via the
  ``render_object`` hook, so any object type can be made renderable;
- block rendering: ``view.render_block(block)`` via ``display_block``;
- element alteration: plugins may mutate element data before rendering;
- view modes: a stack of active view modes (``default``, ``full``,
  ``search-result`` ...) consulted by renderers;
- layout title/description, filled once per view from the main object
  being rendered, falling back to the site configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from markupsafe import Markup, escape

if TYPE_CHECKING:
    from fieldhooks.domain.menus import Block
    from fieldhooks.infrastructure.site import Site

logger = logging.getLogger(__name__)

_SCALARS = (str, bytes, int, float, bool, Mapping, list, tuple, set)


class View:
    """Per-request renderer bound to a :class:`Site`."""

    def __init__(
        self,
        site: Site,
        view_vars: dict[str, Any] | None = None,
        *,
        view_mode: str | None = None,
    ) -> None:
        self._site = site
        self.view_vars: dict[str, Any] = dict(view_vars or {})
        self._blocks: dict[str, str] = {}
        self._view_modes: list[str] = [view_mode or site.settings.templates.default_view_mode]
        self._has_rendered = False

    @property
    def site(self) -> Site:
        return self._site

    # ------------------------------------------------------------------
    # View variables and content blocks
    # ------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        self.view_vars[name] = value

    def assign(self, name: str, content: str) -> None:
        self._blocks[name] = content

    def append(self, name: str, content: str) -> None:
        self._blocks[name] = self._blocks.get(name, "") + content

    def fetch(self, name: str, default: str = "") -> str:
        return self._blocks.get(name, default)

    # ------------------------------------------------------------------
    # View modes
    # ------------------------------------------------------------------

    def in_use_view_mode(self) -> str:
        """The view mode currently in effect."""
        return self._view_modes[-1]

    @contextmanager
    def switch_view_mode(self, view_mode: str) -> Iterator[None]:
        """Render with *view_mode* for the duration of the block."""
        self._view_modes.append(view_mode)
        try:
            yield
        finally:
            self._view_modes.pop()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, target: Any = None, *args: Any) -> str:
        """Render a layout template id, or any object via plugins.

        Objects are offered to the ``render_object`` hook together with
        *args*; the first plugin that answers wins and an unanswered
        object renders as an empty string.

        A layout renders at most once per view; later calls return ``""``.
        """
        if target is not None and not isinstance(target, str):
            html = self._site.plugins.hook.render_object(view=self, obj=target, args=args)
            if html is None:
                logger.debug("No renderer for %s", type(target).__name__)
                return ""
            return html

        if self._has_rendered:
            return ""
        self._has_rendered = True

        layout = target or "Layout.default"
        self._site.plugins.hook.alter_element(view=self, name=layout, data=self.view_vars)
        self._set_title()
        self._set_description()
        return self._site.templates.render(layout, self._template_data(self.view_vars))

    def element(self, name: str, data: dict[str, Any] | None = None) -> str:
        """Render element *name* after plugins had a chance to alter *data*."""
        payload = dict(data or {})
        self._site.plugins.hook.alter_element(view=self, name=name, data=payload)
        return self._site.templates.render(name, self._template_data(payload))

    def element_exists(self, name: str) -> bool:
        return self._site.templates.exists(name)

    def render_block(self, block: Block, options: dict[str, Any] | None = None) -> str:
        """Render *block* through the first plugin handling its ``handler``."""
        html = self._site.plugins.hook.display_block(view=self, block=block, options=options or {})
        if html is None:
            logger.debug("No plugin rendered %s block %s", block.handler, block.id)
            return ""
        return html

    def _template_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {**data, "view": self}

    # ------------------------------------------------------------------
    # Layout title / description
    # ------------------------------------------------------------------

    def _main_objects(self) -> Iterator[Any]:
        """The ``node`` var first, then every other non-scalar var."""
        node = self.view_vars.get("node")
        if node is not None:
            yield node
        for name, value in self.view_vars.items():
            if name == "node" or value is None or isinstance(value, _SCALARS):
                continue
            yield value

    def _first_attr(self, attr: str) -> str:
        for obj in self._main_objects():
            value = getattr(obj, attr, None)
            if value:
                return str(value)
        return ""

    def _set_title(self) -> None:
        """Set ``title_for_layout`` unless the caller already did."""
        title = self.view_vars.get("title_for_layout")
        if not title:
            title = self._first_attr("title") or self._site.settings.site.title
            self.set("title_for_layout", title)
        self.assign("title", str(title))

    def _set_description(self) -> None:
        """Set ``description_for_layout`` and the meta-description tag."""
        description = self.view_vars.get("description_for_layout")
        if description:
            self.assign("description", str(description))
            return
        description = self._first_attr("description") or self._site.settings.site.description
        self.assign("description", description)
        self.set("description_for_layout", description)
        meta = Markup('<meta name="description" content="{}"/>').format(escape(description))
        self.append("meta", str(meta))
