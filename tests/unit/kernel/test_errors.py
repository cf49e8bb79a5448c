"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from mp_events.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    DuplicateListenerError,
    InfrastructureError,
    InvariantViolationError,
    ListenerInvocationError,
    PublicationStoreError,
    SerializationError,
    SerializationMismatchError,
    UnresolvedListenerTypeError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {
            "error": "BaseError",
            "code": "my_code",
            "message": "m",
            "detail": {"key": "val"},
        }

    def test_to_dict_includes_cause_repr(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert BaseError("wrap", cause=cause).__cause__ is cause

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", code="oops", detail={"x": 1})))
        assert parsed["code"] == "oops"
        assert parsed["detail"] == {"x": 1}

    def test_repr(self) -> None:
        assert repr(BaseError("m", code="c")) == "BaseError(code='c', message='m')"


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls, parent",
        [
            (DomainError, BaseError),
            (InvariantViolationError, DomainError),
            (ApplicationError, BaseError),
            (UnresolvedListenerTypeError, ApplicationError),
            (DuplicateListenerError, ApplicationError),
            (ListenerInvocationError, ApplicationError),
            (InfrastructureError, BaseError),
            (SerializationError, InfrastructureError),
            (SerializationMismatchError, SerializationError),
            (PublicationStoreError, InfrastructureError),
        ],
    )
    def test_subclassing(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)


class TestPublicationErrors:
    def test_unresolved_listener_type_keeps_listener(self) -> None:
        marker = object()
        err = UnresolvedListenerTypeError(marker, "no name")
        assert err.listener is marker
        assert err.code == "unresolved_listener_type"
        assert "no name" in err.message

    def test_duplicate_listener_detail(self) -> None:
        err = DuplicateListenerError("billing.on_order")
        assert err.listener_id == "billing.on_order"
        assert err.detail == {"listener_id": "billing.on_order"}

    def test_listener_invocation_error_carries_context(self) -> None:
        cause = RuntimeError("boom")
        event = object()
        err = ListenerInvocationError("l1", event, cause=cause)
        assert err.listener_id == "l1"
        assert err.event is event
        assert err.retry is None
        assert err.__cause__ is cause
        assert err.detail["event_type"] == "object"

    def test_serialization_mismatch_message(self) -> None:
        err = SerializationMismatchError(expected="a.Expected", actual="b.Actual")
        assert err.message == "Invalid serialized event type: b.Actual (expecting: a.Expected)"
        assert err.payload_type == "a.Expected"
        assert err.detail == {"expected": "a.Expected", "actual": "b.Actual"}

    def test_serialization_error_payload_type(self) -> None:
        err = SerializationError("bad", payload_type="x.Y")
        assert err.payload_type == "x.Y"
        assert err.code == "serialization_error"
