"""Tests for LifecycleDispatcher return normalization and gate helpers."""

from __future__ import annotations

import pytest

from fieldhooks.domain.errors import UnknownFieldType
from fieldhooks.domain.fields import FieldDefinition, InvocationContext
from fieldhooks.domain.phases import LifecyclePhase
from fieldhooks.fields.dispatcher import LifecycleDispatcher
from fieldhooks.fields.registry import FieldHandlerRegistry
from tests.conftest import RecordingHandler


def _dispatcher(handler: RecordingHandler) -> LifecycleDispatcher:
    registry = FieldHandlerRegistry()
    registry.register("recording", handler)
    return LifecycleDispatcher(registry)


def _field(name: str = "f") -> FieldDefinition:
    return FieldDefinition(name=name, type="recording")


class TestInvoke:
    def test_gate_none_means_continue(self) -> None:
        dispatcher = _dispatcher(RecordingHandler({"before_find": None}))
        assert dispatcher.invoke(LifecyclePhase.BEFORE_FIND, _field()) is True

    def test_gate_false_means_veto(self) -> None:
        dispatcher = _dispatcher(RecordingHandler({"before_find": False}))
        assert dispatcher.invoke(LifecyclePhase.BEFORE_FIND, _field()) is False

    def test_gate_truthy_value_is_bool(self) -> None:
        dispatcher = _dispatcher(RecordingHandler({"before_delete": "yes"}))
        assert dispatcher.invoke(LifecyclePhase.BEFORE_DELETE, _field()) is True

    def test_notification_result_ignored(self) -> None:
        handler = RecordingHandler({"after_attach": "anything"})
        dispatcher = _dispatcher(handler)
        assert dispatcher.invoke(LifecyclePhase.AFTER_ATTACH, _field()) is None
        assert handler.phases_called() == ["after_attach"]

    def test_render_value_passes_through(self) -> None:
        dispatcher = _dispatcher(RecordingHandler())
        field = _field()
        field.value = "hi"
        assert dispatcher.invoke(LifecyclePhase.DISPLAY, field) == "<p>hi</p>"

    def test_bare_context_built_when_omitted(self) -> None:
        seen: list[InvocationContext] = []
        handler = RecordingHandler()
        handler.edit = lambda ctx: seen.append(ctx) or ""  # type: ignore[method-assign]
        field = _field()
        _dispatcher(handler).invoke(LifecyclePhase.EDIT, field)
        assert seen[0].field is field
        assert seen[0].validator is None

    def test_unknown_type_propagates(self) -> None:
        dispatcher = LifecycleDispatcher(FieldHandlerRegistry())
        with pytest.raises(UnknownFieldType):
            dispatcher.invoke(LifecyclePhase.DISPLAY, _field())

    def test_handler_errors_propagate(self) -> None:
        handler = RecordingHandler()

        def boom(_ctx: InvocationContext) -> str:
            raise RuntimeError("boom")

        handler.display = boom  # type: ignore[method-assign]
        with pytest.raises(RuntimeError, match="boom"):
            _dispatcher(handler).invoke(LifecyclePhase.DISPLAY, _field())


class TestCheck:
    def test_veto_record(self) -> None:
        dispatcher = _dispatcher(RecordingHandler({"before_attach": False}))
        veto = dispatcher.check(LifecyclePhase.BEFORE_ATTACH, _field("body"))
        assert veto is not None
        assert veto.phase is LifecyclePhase.BEFORE_ATTACH
        assert veto.field_name == "body"
        assert veto.type_name == "recording"
        assert "before_attach vetoed" in veto.message

    def test_non_gate_rejected(self) -> None:
        dispatcher = _dispatcher(RecordingHandler())
        with pytest.raises(ValueError, match="not a gate phase"):
            dispatcher.check(LifecyclePhase.DISPLAY, _field())

    def test_check_all_stops_at_first_veto(self) -> None:
        handler = RecordingHandler()
        handler.before_delete = lambda ctx: ctx.field.name != "b"  # type: ignore[method-assign]
        dispatcher = _dispatcher(handler)
        seen: list[str] = []

        def factory(field: FieldDefinition) -> InvocationContext:
            seen.append(field.name)
            return InvocationContext(field=field)

        veto = dispatcher.check_all(
            LifecyclePhase.BEFORE_DELETE,
            [_field("a"), _field("b"), _field("c")],
            factory,
        )
        assert veto is not None
        assert veto.field_name == "b"
        assert seen == ["a", "b"]

    def test_notify_all_reaches_every_field(self) -> None:
        handler = RecordingHandler()
        _dispatcher(handler).notify_all(LifecyclePhase.AFTER_DELETE, [_field("a"), _field("b")])
        assert handler.calls == [("after_delete", "a"), ("after_delete", "b")]
