"""Unit tests for IdentityEventSerializer and JsonEventSerializer."""

from __future__ import annotations

import dataclasses
import json
from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import BaseModel

from mp_events.application.publication import IdentityEventSerializer, JsonEventSerializer
from mp_events.kernel.errors import SerializationError, SerializationMismatchError
from mp_events.kernel.events import DomainEvent, event_type_name


@dataclasses.dataclass(frozen=True)
class CustomerRegistered(DomainEvent):
    customer_id: str
    email: str


@dataclasses.dataclass(frozen=True)
class VipCustomerRegistered(CustomerRegistered):
    tier: str = "gold"


@dataclasses.dataclass(frozen=True)
class CartUpdated:
    cart_id: str
    items: list[str]
    quantities: dict[str, int]


class PaymentCaptured(BaseModel):
    payment_id: str
    amount_cents: int
    captured_at: datetime


class Unserializable:
    def __init__(self) -> None:
        self.handle = object()


_text = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=20)


class TestIdentityEventSerializer:
    def test_returns_same_object(self) -> None:
        event = CartUpdated("c", ["a"], {"a": 1})
        serializer = IdentityEventSerializer()
        assert serializer.serialize(event) is event
        assert serializer.deserialize(event, CartUpdated) is event

    def test_accepts_subclass(self) -> None:
        event = VipCustomerRegistered(customer_id="c", email="e")
        assert IdentityEventSerializer().deserialize(event, CustomerRegistered) is event

    def test_type_mismatch(self) -> None:
        with pytest.raises(SerializationMismatchError) as exc_info:
            IdentityEventSerializer().deserialize("text", CartUpdated)
        assert exc_info.value.expected == event_type_name(CartUpdated)
        assert exc_info.value.actual == "builtins.str"


class TestJsonEventSerializer:
    def test_document_layout(self) -> None:
        serialized = JsonEventSerializer().serialize(CartUpdated("c1", ["x"], {"x": 2}))
        document = json.loads(serialized)
        assert document == {
            "_type": event_type_name(CartUpdated),
            "data": {"cart_id": "c1", "items": ["x"], "quantities": {"x": 2}},
        }

    def test_equal_events_serialize_identically(self) -> None:
        serializer = JsonEventSerializer()
        a = CartUpdated("c", ["x", "y"], {"y": 1, "x": 2})
        b = CartUpdated("c", ["x", "y"], {"x": 2, "y": 1})
        assert serializer.serialize(a) == serializer.serialize(b)

    def test_different_events_serialize_differently(self) -> None:
        serializer = JsonEventSerializer()
        assert serializer.serialize(CartUpdated("a", [], {})) != serializer.serialize(
            CartUpdated("b", [], {})
        )

    def test_domain_event_round_trip(self) -> None:
        serializer = JsonEventSerializer()
        event = CustomerRegistered(customer_id="c-1", email="c@example.com")
        restored = serializer.deserialize(serializer.serialize(event), CustomerRegistered)
        assert restored == event
        assert serializer.serialize(restored) == serializer.serialize(event)

    def test_pydantic_model_round_trip(self) -> None:
        serializer = JsonEventSerializer()
        event = PaymentCaptured(
            payment_id="p-1",
            amount_cents=500,
            captured_at=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
        )
        restored = serializer.deserialize(serializer.serialize(event), PaymentCaptured)
        assert restored == event

    def test_primitive_payload(self) -> None:
        serializer = JsonEventSerializer()
        assert serializer.deserialize(serializer.serialize("hello"), str) == "hello"

    def test_stored_subclass_is_restored(self) -> None:
        serializer = JsonEventSerializer()
        event = VipCustomerRegistered(customer_id="c", email="e", tier="platinum")
        restored = serializer.deserialize(serializer.serialize(event), CustomerRegistered)
        assert isinstance(restored, VipCustomerRegistered)
        assert restored.tier == "platinum"

    def test_unrelated_stored_type_is_rejected(self) -> None:
        serializer = JsonEventSerializer()
        serialized = serializer.serialize(CartUpdated("c", [], {}))
        with pytest.raises(SerializationMismatchError):
            serializer.deserialize(serialized, CustomerRegistered)

    def test_invalid_data_is_a_mismatch(self) -> None:
        serialized = json.dumps({"_type": event_type_name(CartUpdated), "data": {"cart_id": "c"}})
        with pytest.raises(SerializationMismatchError):
            JsonEventSerializer().deserialize(serialized, CartUpdated)

    def test_non_string_input_is_a_mismatch(self) -> None:
        with pytest.raises(SerializationMismatchError):
            JsonEventSerializer().deserialize({"data": {}}, CartUpdated)

    def test_untyped_document_is_a_mismatch(self) -> None:
        with pytest.raises(SerializationMismatchError):
            JsonEventSerializer().deserialize('["not", "a", "document"]', CartUpdated)

    def test_malformed_json(self) -> None:
        with pytest.raises(SerializationError, match="not valid JSON"):
            JsonEventSerializer().deserialize("{nope", CartUpdated)

    def test_unknown_stored_type(self) -> None:
        serialized = json.dumps({"_type": "no_such_module_xyz.Gone", "data": {}})
        with pytest.raises(SerializationError):
            JsonEventSerializer().deserialize(serialized, CartUpdated)

    def test_unserializable_event(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            JsonEventSerializer().serialize(Unserializable())
        assert exc_info.value.payload_type == event_type_name(Unserializable)

    @given(
        cart_id=_text,
        items=st.lists(_text, max_size=5),
        quantities=st.dictionaries(_text, st.integers(min_value=-(10**9), max_value=10**9), max_size=5),
    )
    def test_round_trip_is_stable(
        self, cart_id: str, items: list[str], quantities: dict[str, int]
    ) -> None:
        serializer = JsonEventSerializer()
        event = CartUpdated(cart_id, items, quantities)
        serialized = serializer.serialize(event)
        restored = serializer.deserialize(serialized, CartUpdated)
        assert restored == event
        assert serializer.serialize(restored) == serialized
