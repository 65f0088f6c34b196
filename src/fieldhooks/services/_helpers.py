"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fieldhooks.domain.fields import FieldDefinition, FieldMetadata, PreconditionVeto
from fieldhooks.services.result import VETOED, ServiceResult


def now_iso() -> str:
    """Current UTC time as ISO 8601."""
    return datetime.now(UTC).isoformat()


def field_from_row(row: dict[str, Any], value: Any = None) -> FieldDefinition:
    """Build a :class:`FieldDefinition` from a ``field_instances`` row."""
    return FieldDefinition(
        name=row["name"],
        type=row["handler"],
        label=row["label"] or row["name"],
        table=row["table_alias"],
        metadata=FieldMetadata(
            required=row["required"],
            description=row["description"] or "",
            settings=row["settings"],
        ),
        value=value,
        instance_id=row["id"],
    )


def field_summary(field: FieldDefinition) -> dict[str, Any]:
    return {
        "id": field.instance_id,
        "table": field.table,
        "name": field.name,
        "type": field.type,
        "label": field.label,
        "required": field.metadata.required,
        "description": field.metadata.description,
        "settings": field.metadata.settings,
    }


def vetoed(op: str, veto: PreconditionVeto) -> ServiceResult:
    return ServiceResult.failure(
        op,
        VETOED,
        veto.message,
        detail={
            "phase": veto.phase.value,
            "field": veto.field_name,
            "type": veto.type_name,
        },
    )
