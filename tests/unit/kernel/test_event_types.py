"""Unit tests for kernel events – DomainEvent, PayloadEvent and type names."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from mp_events.kernel.errors import SerializationError
from mp_events.kernel.events import (
    DomainEvent,
    PayloadEvent,
    event_type_name,
    is_event,
    resolve_event_type,
    unwrap,
)


@dataclasses.dataclass(frozen=True)
class AccountOpened(DomainEvent):
    account_id: str


class Outer:
    @dataclasses.dataclass(frozen=True)
    class Inner:
        value: int


class TestDomainEvent:
    def test_defaults(self) -> None:
        event = AccountOpened(account_id="acc-1")
        assert event.event_id
        assert isinstance(event.occurred_at, datetime)
        assert event.occurred_at.tzinfo is not None

    def test_event_type_is_class_name(self) -> None:
        assert AccountOpened(account_id="a").event_type == "AccountOpened"

    def test_unique_ids(self) -> None:
        assert AccountOpened(account_id="a").event_id != AccountOpened(account_id="a").event_id

    def test_frozen(self) -> None:
        event = AccountOpened(account_id="a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.account_id = "b"  # type: ignore[misc]


class TestPayloadEvent:
    def test_value_equality(self) -> None:
        assert PayloadEvent(1) == PayloadEvent(1)
        assert PayloadEvent(1) != PayloadEvent(2)

    def test_is_event(self) -> None:
        assert is_event(AccountOpened(account_id="a"))
        assert is_event(PayloadEvent("x"))
        assert not is_event("x")
        assert not is_event({"k": "v"})

    def test_unwrap(self) -> None:
        event = AccountOpened(account_id="a")
        assert unwrap(PayloadEvent(event)) is event
        assert unwrap(event) is event


class TestEventTypeName:
    def test_instance_and_class_agree(self) -> None:
        event = AccountOpened(account_id="a")
        assert event_type_name(event) == event_type_name(AccountOpened)
        assert event_type_name(event).endswith(".AccountOpened")

    def test_builtin(self) -> None:
        assert event_type_name("x") == "builtins.str"

    def test_nested_class_uses_qualname(self) -> None:
        assert event_type_name(Outer.Inner).endswith(".Outer.Inner")


class TestResolveEventType:
    def test_round_trip_module_class(self) -> None:
        assert resolve_event_type(event_type_name(AccountOpened)) is AccountOpened

    def test_round_trip_nested_class(self) -> None:
        assert resolve_event_type(event_type_name(Outer.Inner)) is Outer.Inner

    def test_builtin(self) -> None:
        assert resolve_event_type("builtins.dict") is dict

    def test_library_class(self) -> None:
        assert resolve_event_type("mp_events.kernel.events.domain_event.PayloadEvent") is PayloadEvent

    def test_unknown_module_raises(self) -> None:
        with pytest.raises(SerializationError, match="Cannot find event class"):
            resolve_event_type("no_such_module_xyz.Thing")

    def test_unknown_attribute_raises(self) -> None:
        with pytest.raises(SerializationError):
            resolve_event_type("mp_events.kernel.events.NoSuchEvent")

    def test_non_class_attribute_raises(self) -> None:
        with pytest.raises(SerializationError):
            resolve_event_type("mp_events.kernel.events.unwrap")

    def test_local_class_raises(self) -> None:
        @dataclasses.dataclass
        class Local:
            x: int

        with pytest.raises(SerializationError, match="local scope"):
            resolve_event_type(event_type_name(Local))
