"""FieldInstanceService — attach, detach and inspect field instances.

Attach pipeline: RESOLVE → CONFIGURE → DEDUPE → BEFORE_ATTACH → PERSIST → AFTER_ATTACH
Detach pipeline: LOOKUP → BEFORE_DETACH → DELETE → AFTER_DETACH

A veto from a ``before_*`` phase stops the pipeline before anything is
written. ``after_*`` results are ignored.
"""

from __future__ import annotations

import logging
from typing import Any

from fieldhooks.domain.errors import InvalidFieldSettings
from fieldhooks.domain.fields import FieldDefinition, FieldMetadata, InvocationContext
from fieldhooks.domain.phases import LifecyclePhase
from fieldhooks.services._helpers import field_from_row, field_summary, now_iso, vetoed
from fieldhooks.services.base import BaseService
from fieldhooks.services.result import (
    DUPLICATE,
    INVALID_SETTINGS,
    NOT_FOUND,
    ServiceResult,
)

logger = logging.getLogger(__name__)


class FieldInstanceService(BaseService):
    """Manages the field instances attached to tables."""

    # ------------------------------------------------------------------
    # Handler types
    # ------------------------------------------------------------------

    def list_types(self, *, include_hidden: bool = False) -> ServiceResult:
        """Registered field types with their descriptors."""
        types = [
            {
                "type": type_name,
                "name": descriptor.name,
                "description": descriptor.description,
                "hidden": descriptor.hidden,
            }
            for type_name, descriptor in self._site.registry.list_handlers()
            if include_hidden or not descriptor.hidden
        ]
        return ServiceResult(ok=True, op="list_types", data={"types": types, "count": len(types)})

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def attach(
        self,
        table: str,
        name: str,
        type_name: str,
        *,
        label: str | None = None,
        required: bool = False,
        description: str = "",
        settings: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Attach a new *type_name* field called *name* to *table*.

        Raises:
            UnknownFieldType: If no handler is registered for *type_name*.
        """
        op = "attach_field"
        field = FieldDefinition(
            name=name,
            type=type_name,
            label=label or name.replace("_", " ").title(),
            table=table,
            metadata=FieldMetadata(
                required=required,
                description=description,
                settings=dict(settings or {}),
            ),
        )

        handler = self._site.registry.resolve(type_name)
        try:
            handler.configure(field)
        except InvalidFieldSettings as exc:
            return ServiceResult.failure(
                op,
                INVALID_SETTINGS,
                str(exc),
                detail={"field": name, "type": type_name, "reason": exc.reason},
            )

        if self._site.fields.get_instance(table, name) is not None:
            return ServiceResult.failure(
                op,
                DUPLICATE,
                f"Field {name!r} is already attached to {table!r}",
                detail={"table": table, "field": name},
            )

        context = InvocationContext(field=field, table=table)
        veto = self._dispatcher.check(LifecyclePhase.BEFORE_ATTACH, field, context)
        if veto is not None:
            return vetoed(op, veto)

        with self._site.transaction() as conn:
            field.instance_id = self._site.fields.insert_instance(
                conn,
                table_alias=table,
                name=name,
                handler=type_name,
                label=field.label,
                required=required,
                description=description,
                settings=field.metadata.settings,
                created=now_iso(),
            )

        self._dispatcher.invoke(LifecyclePhase.AFTER_ATTACH, field, context)
        logger.info("Attached %s field %s to %s", type_name, name, table)
        return ServiceResult(ok=True, op=op, data=field_summary(field))

    def detach(self, table: str, name: str) -> ServiceResult:
        """Detach field *name* from *table*, dropping every stored value."""
        op = "detach_field"
        field = self._find(table, name)
        if field is None:
            return self._not_found(op, table, name)

        context = InvocationContext(field=field, table=table)
        veto = self._dispatcher.check(LifecyclePhase.BEFORE_DETACH, field, context)
        if veto is not None:
            return vetoed(op, veto)

        assert field.instance_id is not None
        with self._site.transaction() as conn:
            self._site.fields.delete_instance(conn, field.instance_id)

        self._dispatcher.invoke(LifecyclePhase.AFTER_DETACH, field, context)
        logger.info("Detached %s field %s from %s", field.type, name, table)
        return ServiceResult(ok=True, op=op, data=field_summary(field))

    def list_instances(self, table: str) -> ServiceResult:
        rows = self._site.fields.list_instances(table)
        fields = [field_summary(field_from_row(row)) for row in rows]
        return ServiceResult(
            ok=True,
            op="list_fields",
            data={"table": table, "fields": fields, "count": len(fields)},
        )

    # ------------------------------------------------------------------
    # Instance forms
    # ------------------------------------------------------------------

    def settings_form(self, table: str, name: str) -> ServiceResult:
        """Render the handler's settings form for an attached instance."""
        return self._render_form("field_settings", LifecyclePhase.SETTINGS, table, name)

    def formatter_form(
        self,
        table: str,
        name: str,
        *,
        options: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Render the handler's display-formatter form for an attached instance."""
        return self._render_form(
            "field_formatter",
            LifecyclePhase.FORMATTER,
            table,
            name,
            options=options,
        )

    def _render_form(
        self,
        op: str,
        phase: LifecyclePhase,
        table: str,
        name: str,
        *,
        options: dict[str, Any] | None = None,
    ) -> ServiceResult:
        field = self._find(table, name)
        if field is None:
            return self._not_found(op, table, name)
        self._site.registry.resolve(field.type).configure(field)
        view = self._site.view()
        context = InvocationContext(
            field=field,
            view=view,
            table=table,
            options=dict(options or {}),
        )
        html = self._dispatcher.invoke(phase, field, context)
        return ServiceResult(ok=True, op=op, data={"table": table, "field": name, "html": html})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, table: str, name: str) -> FieldDefinition | None:
        row = self._site.fields.get_instance(table, name)
        return field_from_row(row) if row is not None else None

    @staticmethod
    def _not_found(op: str, table: str, name: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            NOT_FOUND,
            f"No field {name!r} attached to {table!r}",
            detail={"table": table, "field": name},
        )
