"""Read side: the denormalized product projection and its repository.

Queries never load the aggregate.  They read stored rows directly and
compute the effective price with their own clock at query time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class ProductReadModel:
    id: str
    name: str
    description: str
    category: str
    base_price_numerator: int
    base_price_denominator: int
    effective_price_numerator: int
    effective_price_denominator: int
    status: str
    created_at: datetime
    updated_at: datetime
    discount_percent: int | None = None
    discount_start: datetime | None = None
    discount_end: datetime | None = None
    archived_at: datetime | None = None

    @property
    def has_active_discount(self) -> bool:
        """True when the effective price differs from the base price."""
        return (
            self.effective_price_numerator * self.base_price_denominator
            != self.base_price_numerator * self.effective_price_denominator
        )


@dataclass(frozen=True)
class ProductListFilters:
    category: str | None = None
    status: str | None = None
    active_only: bool = False


@dataclass(frozen=True)
class Pagination:
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @staticmethod
    def of(limit: int | None, offset: int | None) -> Pagination:
        """Apply defaults: missing or non-positive limit -> 20, above 100 -> 100."""
        if limit is None or limit <= 0:
            limit = DEFAULT_PAGE_SIZE
        limit = min(limit, MAX_PAGE_SIZE)
        offset = max(offset or 0, 0)
        return Pagination(limit=limit, offset=offset)


@dataclass(frozen=True)
class ProductListResult:
    products: list[ProductReadModel]
    total_count: int
    has_more: bool


def effective_price(
    base_numerator: int,
    base_denominator: int,
    discount_percent: int | None,
    discount_start: datetime | None,
    discount_end: datetime | None,
    now: datetime,
) -> tuple[int, int]:
    """Return the (numerator, denominator) a buyer pays at ``now``.

    ``base * (100 - pct) / 100`` while ``start <= now <= end``; the base
    pair unchanged otherwise.  The result is not reduced.
    """
    if (
        discount_percent is None
        or discount_start is None
        or discount_end is None
        or not discount_start <= now <= discount_end
    ):
        return base_numerator, base_denominator
    return base_numerator * (100 - discount_percent), base_denominator * 100


class ReadModelRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> ProductReadModel:
        """Return the projection, raising ProductNotFoundError if absent."""

    @abstractmethod
    def list(self, filters: ProductListFilters, pagination: Pagination) -> ProductListResult:
        """Return one page, newest first, plus the unpaginated total."""

    @abstractmethod
    def count_by_category(self, category: str) -> int:
        """Count non-archived products in ``category``."""
