"""Logical schema shared by the repositories and the stores.

products(product_id PK, name, description, category,
         base_price_numerator, base_price_denominator,
         discount_percent?, discount_start_date?, discount_end_date?,
         status, created_at, updated_at, archived_at?)

outbox_events(event_id PK, event_type, aggregate_id, payload,
              status, created_at, processed_at?)

Timestamps are stored as ISO-8601 strings.
"""

from __future__ import annotations

from datetime import datetime

PRODUCTS = "products"
OUTBOX_EVENTS = "outbox_events"

PRIMARY_KEYS = {
    PRODUCTS: "product_id",
    OUTBOX_EVENTS: "event_id",
}

# products columns
PRODUCT_ID = "product_id"
NAME = "name"
DESCRIPTION = "description"
CATEGORY = "category"
BASE_PRICE_NUMERATOR = "base_price_numerator"
BASE_PRICE_DENOMINATOR = "base_price_denominator"
DISCOUNT_PERCENT = "discount_percent"
DISCOUNT_START_DATE = "discount_start_date"
DISCOUNT_END_DATE = "discount_end_date"
STATUS = "status"
CREATED_AT = "created_at"
UPDATED_AT = "updated_at"
ARCHIVED_AT = "archived_at"

# outbox_events columns
EVENT_ID = "event_id"
EVENT_TYPE = "event_type"
AGGREGATE_ID = "aggregate_id"
PAYLOAD = "payload"
PROCESSED_AT = "processed_at"


def encode_time(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def decode_time(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None
