"""Repository for attached field instances and their per-entity values."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from fieldhooks.infrastructure.database.schema import field_instances, field_values

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine


def _instance_row(row: Any) -> dict[str, Any]:
    data = dict(row)
    data["required"] = bool(data.get("required"))
    data["settings"] = json.loads(data.get("settings") or "{}")
    return data


class FieldRepository:
    """Encapsulates SQL for field instances and field values.

    Reads open their own connection; writes take the caller's connection
    so they join the caller's transaction.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def list_instances(self, table_alias: str) -> list[dict[str, Any]]:
        """Instances attached to *table_alias*, in display order."""
        stmt = (
            select(field_instances)
            .where(field_instances.c.table_alias == table_alias)
            .order_by(field_instances.c.ordering, field_instances.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_instance_row(row) for row in rows]

    def get_instance(self, table_alias: str, name: str) -> dict[str, Any] | None:
        stmt = select(field_instances).where(
            field_instances.c.table_alias == table_alias,
            field_instances.c.name == name,
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _instance_row(row) if row is not None else None

    def insert_instance(
        self,
        conn: Connection,
        *,
        table_alias: str,
        name: str,
        handler: str,
        label: str,
        required: bool,
        description: str,
        settings: dict[str, Any],
        created: str,
    ) -> int:
        """Insert an instance as the last one of its table. Returns its id."""
        last = conn.execute(
            select(field_instances.c.ordering)
            .where(field_instances.c.table_alias == table_alias)
            .order_by(field_instances.c.ordering.desc())
            .limit(1)
        ).scalar_one_or_none()
        result = conn.execute(
            insert(field_instances).values(
                table_alias=table_alias,
                name=name,
                handler=handler,
                label=label,
                required=int(required),
                description=description,
                settings=json.dumps(settings, sort_keys=True),
                ordering=(last + 1) if last is not None else 0,
                created=created,
            )
        )
        assert result.lastrowid is not None
        return result.lastrowid

    def delete_instance(self, conn: Connection, instance_id: int) -> None:
        """Delete an instance together with every value stored for it."""
        conn.execute(delete(field_values).where(field_values.c.instance_id == instance_id))
        conn.execute(delete(field_instances).where(field_instances.c.id == instance_id))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def load_values(self, table_alias: str, entity_id: str) -> dict[int, Any]:
        """Stored values for one entity, keyed by instance id."""
        stmt = select(field_values.c.instance_id, field_values.c.value).where(
            field_values.c.table_alias == table_alias,
            field_values.c.entity_id == entity_id,
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).all()
        return {row.instance_id: json.loads(row.value) for row in rows if row.value is not None}

    def has_entity(self, table_alias: str, entity_id: str) -> bool:
        stmt = (
            select(field_values.c.id)
            .where(
                field_values.c.table_alias == table_alias,
                field_values.c.entity_id == entity_id,
            )
            .limit(1)
        )
        with self._engine.connect() as conn:
            return conn.execute(stmt).first() is not None

    def upsert_value(
        self,
        conn: Connection,
        *,
        instance_id: int,
        table_alias: str,
        entity_id: str,
        value: Any,
        modified: str,
    ) -> None:
        encoded = json.dumps(value)
        existing = conn.execute(
            select(field_values.c.id).where(
                field_values.c.instance_id == instance_id,
                field_values.c.entity_id == entity_id,
            )
        ).scalar_one_or_none()
        if existing is None:
            conn.execute(
                insert(field_values).values(
                    instance_id=instance_id,
                    table_alias=table_alias,
                    entity_id=entity_id,
                    value=encoded,
                    modified=modified,
                )
            )
        else:
            conn.execute(
                update(field_values)
                .where(field_values.c.id == existing)
                .values(value=encoded, modified=modified)
            )

    def delete_values(self, conn: Connection, table_alias: str, entity_id: str) -> int:
        """Delete every value of one entity. Returns the number of rows removed."""
        result = conn.execute(
            delete(field_values).where(
                field_values.c.table_alias == table_alias,
                field_values.c.entity_id == entity_id,
            )
        )
        return result.rowcount or 0
