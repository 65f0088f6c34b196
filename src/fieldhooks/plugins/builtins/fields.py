"""Built-in plugin rendering field definitions passed to ``View.render``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fieldhooks.domain.fields import FieldDefinition, InvocationContext
from fieldhooks.domain.phases import LifecyclePhase
from fieldhooks.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from fieldhooks.infrastructure.view import View


class FieldRenderPlugin:
    """``view.render(field)`` dispatches the DISPLAY phase of its handler.

    An optional first render argument is used as the invocation options.
    """

    @hookimpl
    def render_object(self, view: View, obj: object, args: tuple[Any, ...]) -> str | None:
        if not isinstance(obj, FieldDefinition):
            return None
        options = dict(args[0]) if args and isinstance(args[0], dict) else {}
        context = InvocationContext(field=obj, view=view, table=obj.table, options=options)
        return view.site.dispatcher.invoke(LifecyclePhase.DISPLAY, obj, context)
