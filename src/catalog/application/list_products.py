"""Application service: List Products use case (query).

An unknown status filter is a validation error.  Page size defaults
to 20 and is clamped to 100 rather than rejected.
"""

from __future__ import annotations

from catalog.application.dto import ProductListDTO, ProductListItemDTO
from catalog.application.read_model import (
    Pagination,
    ProductListFilters,
    ReadModelRepository,
)
from catalog.domain.exceptions import InvalidStatusError
from catalog.domain.model.product import ProductStatus
from catalog.domain.model.value_objects import Money


class ListProductsHandler:

    def __init__(self, read_model: ReadModelRepository) -> None:
        self._read_model = read_model

    def handle(
        self,
        category: str | None = None,
        status: str | None = None,
        active_only: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> ProductListDTO:
        if status:
            try:
                ProductStatus(status)
            except ValueError as exc:
                raise InvalidStatusError(f"invalid product status: {status!r}") from exc

        filters = ProductListFilters(
            category=category or None,
            status=status or None,
            active_only=active_only,
        )
        pagination = Pagination.of(limit, offset)
        result = self._read_model.list(filters, pagination)

        return ProductListDTO(
            products=[
                ProductListItemDTO(
                    id=p.id,
                    name=p.name,
                    category=p.category,
                    status=p.status,
                    base_price=str(Money.of(p.base_price_numerator, p.base_price_denominator)),
                    effective_price=str(
                        Money.of(p.effective_price_numerator, p.effective_price_denominator)
                    ),
                    discount_percent=p.discount_percent,
                    created_at=p.created_at,
                )
                for p in result.products
            ],
            total_count=result.total_count,
            has_more=result.has_more,
            limit=pagination.limit,
            offset=pagination.offset,
        )

    def count_by_category(self, category: str) -> int:
        return self._read_model.count_by_category(category)
