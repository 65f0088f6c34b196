"""Lifecycle phases a field handler responds to.

Phases fall into four kinds:
- Render: produce markup (display, edit, formatter, settings).
- Describe: produce a HandlerDescriptor (info).
- Gate: return a boolean; ``False`` vetoes the enclosing operation.
- Notification: result is ignored, the operation is already committed.

The enum value doubles as the handler method name.
"""

from __future__ import annotations

from enum import StrEnum


class LifecyclePhase(StrEnum):
    """Points in an entity or field-instance lifecycle where handlers run."""

    # --- Entity phases ---
    DISPLAY = "display"
    EDIT = "edit"
    FORMATTER = "formatter"
    BEFORE_FIND = "before_find"
    AFTER_SAVE = "after_save"
    BEFORE_VALIDATE = "before_validate"
    AFTER_VALIDATE = "after_validate"
    BEFORE_DELETE = "before_delete"
    AFTER_DELETE = "after_delete"

    # --- Instance phases ---
    INFO = "info"
    SETTINGS = "settings"
    BEFORE_ATTACH = "before_attach"
    AFTER_ATTACH = "after_attach"
    BEFORE_DETACH = "before_detach"
    AFTER_DETACH = "after_detach"


class PhaseKind(StrEnum):
    """How the dispatcher treats a phase's return value."""

    RENDER = "render"
    DESCRIBE = "describe"
    GATE = "gate"
    NOTIFICATION = "notification"


PHASE_KINDS: dict[LifecyclePhase, PhaseKind] = {
    LifecyclePhase.DISPLAY: PhaseKind.RENDER,
    LifecyclePhase.EDIT: PhaseKind.RENDER,
    LifecyclePhase.FORMATTER: PhaseKind.RENDER,
    LifecyclePhase.SETTINGS: PhaseKind.RENDER,
    LifecyclePhase.INFO: PhaseKind.DESCRIBE,
    LifecyclePhase.BEFORE_FIND: PhaseKind.GATE,
    LifecyclePhase.BEFORE_VALIDATE: PhaseKind.GATE,
    LifecyclePhase.AFTER_VALIDATE: PhaseKind.GATE,
    LifecyclePhase.BEFORE_DELETE: PhaseKind.GATE,
    LifecyclePhase.BEFORE_ATTACH: PhaseKind.GATE,
    LifecyclePhase.BEFORE_DETACH: PhaseKind.GATE,
    LifecyclePhase.AFTER_SAVE: PhaseKind.NOTIFICATION,
    LifecyclePhase.AFTER_DELETE: PhaseKind.NOTIFICATION,
    LifecyclePhase.AFTER_ATTACH: PhaseKind.NOTIFICATION,
    LifecyclePhase.AFTER_DETACH: PhaseKind.NOTIFICATION,
}


def kind_of(phase: LifecyclePhase) -> PhaseKind:
    """Return the kind of *phase*."""
    return PHASE_KINDS[phase]


def is_gate(phase: LifecyclePhase) -> bool:
    """Whether *phase* may veto its enclosing operation."""
    return PHASE_KINDS[phase] is PhaseKind.GATE
