"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProductDTO:
    """Output: a single product as returned by GetProduct."""

    id: str
    name: str
    description: str
    category: str
    status: str
    base_price: str  # formatted, e.g. "19.99"
    effective_price: str
    base_price_numerator: int
    base_price_denominator: int
    effective_price_numerator: int
    effective_price_denominator: int
    discount_percent: int | None
    discount_start: datetime | None
    discount_end: datetime | None
    has_active_discount: bool
    created_at: datetime
    updated_at: datetime
    archived_at: datetime | None


@dataclass(frozen=True)
class ProductListItemDTO:
    """Output: one row of a ListProducts page."""

    id: str
    name: str
    category: str
    status: str
    base_price: str
    effective_price: str
    discount_percent: int | None
    created_at: datetime


@dataclass(frozen=True)
class ProductListDTO:
    products: list[ProductListItemDTO]
    total_count: int
    has_more: bool
    limit: int
    offset: int


@dataclass(frozen=True)
class PriceQuoteDTO:
    """Output: the price of some units of one product at ``quoted_at``."""

    product_id: str
    quantity: int
    base_price: str
    discount_percent: int
    discount_amount: str
    effective_price: str
    total: str
    savings: str
    quoted_at: datetime
