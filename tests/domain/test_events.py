"""Unit tests for outbox payload mapping of domain events."""

from datetime import timedelta

import pytest

from catalog.domain.model.events import (
    DiscountApplied,
    DiscountRemoved,
    ProductActivated,
    ProductArchived,
    ProductCreated,
    ProductDeactivated,
    ProductUpdated,
    event_payload,
)
from catalog.domain.model.value_objects import Money
from tests.fakes import T0


class TestEventTypes:

    def test_type_strings(self):
        assert ProductCreated.event_type == "product.created"
        assert ProductUpdated.event_type == "product.updated"
        assert ProductActivated.event_type == "product.activated"
        assert ProductDeactivated.event_type == "product.deactivated"
        assert ProductArchived.event_type == "product.archived"
        assert DiscountApplied.event_type == "product.discount_applied"
        assert DiscountRemoved.event_type == "product.discount_removed"


class TestEventPayload:

    def test_created_carries_exact_price(self):
        event = ProductCreated("p-1", T0, "Widget", "desc", "tools", Money.of(1999, 100))
        assert event_payload(event) == {
            "event_type": "product.created",
            "aggregate_id": "p-1",
            "occurred_at": T0.isoformat(),
            "name": "Widget",
            "description": "desc",
            "category": "tools",
            "base_price": {"numerator": 1999, "denominator": 100},
        }

    def test_updated_carries_new_values(self):
        payload = event_payload(ProductUpdated("p-1", T0, "Gadget", "", "gizmos"))
        assert payload["name"] == "Gadget"
        assert payload["category"] == "gizmos"

    def test_discount_applied_carries_window(self):
        end = T0 + timedelta(days=2)
        payload = event_payload(DiscountApplied("p-1", T0, 15, T0, end))
        assert payload["percentage"] == 15
        assert payload["start_date"] == T0.isoformat()
        assert payload["end_date"] == end.isoformat()

    @pytest.mark.parametrize(
        "cls", [ProductActivated, ProductDeactivated, ProductArchived, DiscountRemoved]
    )
    def test_transition_events_carry_only_envelope(self, cls):
        assert set(event_payload(cls("p-1", T0))) == {"event_type", "aggregate_id", "occurred_at"}

    def test_unknown_event_rejected(self):
        with pytest.raises(TypeError, match="Unknown domain event"):
            event_payload(object())
