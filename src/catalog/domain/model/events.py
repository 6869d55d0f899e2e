"""Domain events raised by the Product aggregate.

The set is closed: ``DomainEvent`` is the union of the seven event
classes below and ``event_payload`` handles each of them explicitly.
Adding an event kind means adding a branch there as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Union

from catalog.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductCreated:
    event_type: ClassVar[str] = "product.created"

    aggregate_id: str
    occurred_at: datetime
    name: str
    description: str
    category: str
    base_price: Money


@dataclass(frozen=True)
class ProductUpdated:
    event_type: ClassVar[str] = "product.updated"

    aggregate_id: str
    occurred_at: datetime
    name: str
    description: str
    category: str


@dataclass(frozen=True)
class ProductActivated:
    event_type: ClassVar[str] = "product.activated"

    aggregate_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class ProductDeactivated:
    event_type: ClassVar[str] = "product.deactivated"

    aggregate_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class ProductArchived:
    event_type: ClassVar[str] = "product.archived"

    aggregate_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class DiscountApplied:
    event_type: ClassVar[str] = "product.discount_applied"

    aggregate_id: str
    occurred_at: datetime
    percentage: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DiscountRemoved:
    event_type: ClassVar[str] = "product.discount_removed"

    aggregate_id: str
    occurred_at: datetime


DomainEvent = Union[
    ProductCreated,
    ProductUpdated,
    ProductActivated,
    ProductDeactivated,
    ProductArchived,
    DiscountApplied,
    DiscountRemoved,
]


EVENT_TYPES = (
    ProductCreated,
    ProductUpdated,
    ProductActivated,
    ProductDeactivated,
    ProductArchived,
    DiscountApplied,
    DiscountRemoved,
)


def event_payload(event: DomainEvent) -> dict[str, Any]:
    """Map an event to the JSON-ready dict stored in the outbox."""
    if not isinstance(event, EVENT_TYPES):
        raise TypeError(f"Unknown domain event: {type(event).__name__}")

    data: dict[str, Any] = {
        "event_type": event.event_type,
        "aggregate_id": event.aggregate_id,
        "occurred_at": event.occurred_at.isoformat(),
    }

    if isinstance(event, ProductCreated):
        data["name"] = event.name
        data["description"] = event.description
        data["category"] = event.category
        data["base_price"] = {
            "numerator": event.base_price.numerator,
            "denominator": event.base_price.denominator,
        }
    elif isinstance(event, ProductUpdated):
        data["name"] = event.name
        data["description"] = event.description
        data["category"] = event.category
    elif isinstance(event, DiscountApplied):
        data["percentage"] = event.percentage
        data["start_date"] = event.start.isoformat()
        data["end_date"] = event.end.isoformat()
    # Activated, Deactivated, Archived and DiscountRemoved carry no extra fields.

    return data
