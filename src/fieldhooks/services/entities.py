"""EntityFieldService — field values of one entity through their lifecycle.

Load:   INSTANCES → VALUES → CONFIGURE → BEFORE_FIND (false drops the field)
Save:   LOAD → BEFORE_VALIDATE (rules) → VALIDATE → AFTER_VALIDATE → AFTER_SAVE → PERSIST
Delete: LOAD → BEFORE_DELETE → DELETE → AFTER_DELETE

Fields missing from a save payload keep, and are validated with, their
stored value.
"""

from __future__ import annotations

import logging
from typing import Any

from fieldhooks.domain.fields import FieldDefinition, InvocationContext
from fieldhooks.domain.phases import LifecyclePhase
from fieldhooks.domain.validation import Validator
from fieldhooks.services._helpers import field_from_row, now_iso, vetoed
from fieldhooks.services.base import BaseService
from fieldhooks.services.result import NOT_FOUND, VALIDATION_FAILED, ServiceResult

logger = logging.getLogger(__name__)


def _entity_ref(table: str, entity_id: str) -> dict[str, str]:
    return {"table": table, "id": entity_id}


class EntityFieldService(BaseService):
    """Loads, validates, saves, deletes and renders an entity's fields."""

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load_fields(self, table: str, entity_id: str) -> list[FieldDefinition]:
        """Field definitions of *table* holding *entity_id*'s values.

        Raises:
            UnknownFieldType: If an instance's handler is not registered.
            InvalidFieldSettings: If stored settings no longer validate.
        """
        values = self._site.fields.load_values(table, entity_id)
        entity = _entity_ref(table, entity_id)
        loaded: list[FieldDefinition] = []
        for row in self._site.fields.list_instances(table):
            field = field_from_row(row, values.get(row["id"]))
            self._site.registry.resolve(field.type).configure(field)
            context = InvocationContext(field=field, entity=entity, table=table)
            if not self._dispatcher.invoke(LifecyclePhase.BEFORE_FIND, field, context):
                logger.debug(
                    "Field %s hidden from %s/%s by before_find", field.name, table, entity_id
                )
                continue
            loaded.append(field)
        return loaded

    def get(self, table: str, entity_id: str) -> ServiceResult:
        """Raw field values of one entity."""
        op = "get_entity"
        if not self._site.fields.has_entity(table, entity_id):
            return self._not_found(op, table, entity_id)
        fields = self.load_fields(table, entity_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "table": table,
                "entity_id": entity_id,
                "fields": {field.name: field.value for field in fields},
            },
        )

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, table: str, entity_id: str, post: dict[str, Any]) -> ServiceResult:
        """Validate *post* against the attached fields and store it."""
        op = "save_entity"
        warnings: list[str] = []
        fields = self.load_fields(table, entity_id)
        known = {field.name for field in fields}
        for name in post:
            if name not in known:
                warnings.append(f"Ignoring unknown field {name!r} for table {table!r}")

        entity = _entity_ref(table, entity_id)
        submitted = {field.name: post.get(field.name, field.value) for field in fields}
        validator = Validator()

        def context_for(field: FieldDefinition) -> InvocationContext:
            return InvocationContext(
                field=field,
                entity=entity,
                validator=validator,
                post=submitted[field.name],
                table=table,
            )

        veto = self._dispatcher.check_all(LifecyclePhase.BEFORE_VALIDATE, fields, context_for)
        if veto is not None:
            return vetoed(op, veto)

        data = {field.path: submitted[field.name] for field in fields}
        failures = validator.validate(data)
        if failures:
            errors: dict[str, list[str]] = {}
            for failure in failures:
                errors.setdefault(failure.path.lstrip(":"), []).append(failure.message)
            return ServiceResult.failure(
                op,
                VALIDATION_FAILED,
                f"{len(failures)} validation error(s) in {table}/{entity_id}",
                detail={
                    "errors": errors,
                    "failures": [
                        {"field": f.path.lstrip(":"), "rule": f.rule, "message": f.message}
                        for f in failures
                    ],
                },
            )

        veto = self._dispatcher.check_all(LifecyclePhase.AFTER_VALIDATE, fields, context_for)
        if veto is not None:
            return vetoed(op, veto)

        modified = now_iso()
        with self._site.transaction() as conn:
            for field in fields:
                self._dispatcher.invoke(LifecyclePhase.AFTER_SAVE, field, context_for(field))
                assert field.instance_id is not None
                self._site.fields.upsert_value(
                    conn,
                    instance_id=field.instance_id,
                    table_alias=table,
                    entity_id=entity_id,
                    value=field.value,
                    modified=modified,
                )

        logger.info("Saved %d field(s) of %s/%s", len(fields), table, entity_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "table": table,
                "entity_id": entity_id,
                "fields": {field.name: field.value for field in fields},
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, table: str, entity_id: str) -> ServiceResult:
        """Drop every stored value of one entity unless a field vetoes."""
        op = "delete_entity"
        if not self._site.fields.has_entity(table, entity_id):
            return self._not_found(op, table, entity_id)

        fields = self.load_fields(table, entity_id)
        entity = _entity_ref(table, entity_id)

        def context_for(field: FieldDefinition) -> InvocationContext:
            return InvocationContext(field=field, entity=entity, table=table)

        veto = self._dispatcher.check_all(LifecyclePhase.BEFORE_DELETE, fields, context_for)
        if veto is not None:
            return vetoed(op, veto)

        with self._site.transaction() as conn:
            count = self._site.fields.delete_values(conn, table, entity_id)

        self._dispatcher.notify_all(LifecyclePhase.AFTER_DELETE, fields, context_for)
        return ServiceResult(
            ok=True,
            op=op,
            data={"table": table, "entity_id": entity_id, "deleted": count},
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def display(
        self,
        table: str,
        entity_id: str,
        *,
        view_mode: str | None = None,
    ) -> ServiceResult:
        """Render every field of an entity for viewing."""
        op = "display_entity"
        if not self._site.fields.has_entity(table, entity_id):
            return self._not_found(op, table, entity_id)

        fields = self.load_fields(table, entity_id)
        view = self._site.view({"entity": _entity_ref(table, entity_id)}, view_mode=view_mode)
        rendered = {field.name: view.render(field) for field in fields}
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "table": table,
                "entity_id": entity_id,
                "view_mode": view.in_use_view_mode(),
                "fields": rendered,
                "html": "\n".join(rendered.values()),
            },
        )

    def edit(self, table: str, entity_id: str) -> ServiceResult:
        """Render the edit form fragments; an unknown entity gets blank inputs."""
        fields = self.load_fields(table, entity_id)
        entity = _entity_ref(table, entity_id)
        view = self._site.view({"entity": entity})
        rendered = {
            field.name: self._dispatcher.invoke(
                LifecyclePhase.EDIT,
                field,
                InvocationContext(field=field, entity=entity, view=view, table=table),
            )
            for field in fields
        }
        return ServiceResult(
            ok=True,
            op="edit_entity",
            data={
                "table": table,
                "entity_id": entity_id,
                "fields": rendered,
                "html": "\n".join(rendered.values()),
            },
        )

    @staticmethod
    def _not_found(op: str, table: str, entity_id: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            NOT_FOUND,
            f"No stored fields for {table}/{entity_id}",
            detail={"table": table, "entity_id": entity_id},
        )
