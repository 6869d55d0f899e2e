"""Store-backed implementation of ReadModelRepository.

Scans the ``products`` table directly; the aggregate is never loaded.
Effective price is computed per row with this repository's own clock.
"""

from __future__ import annotations

from catalog.application.clock import Clock
from catalog.application.read_model import (
    Pagination,
    ProductListFilters,
    ProductListResult,
    ProductReadModel,
    ReadModelRepository,
    effective_price,
)
from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.model.product import ProductStatus
from catalog.infrastructure.persistence import schema as s
from catalog.infrastructure.persistence.store import Row, Store

_ARCHIVED = ProductStatus.ARCHIVED.value


class StoreReadModelRepository(ReadModelRepository):

    def __init__(self, store: Store, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    # --- ReadModelRepository interface ----------------------------------------

    def get_by_id(self, product_id: str) -> ProductReadModel:
        row = self._store.get(s.PRODUCTS, product_id)
        if row is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return self._to_read_model(row)

    def list(self, filters: ProductListFilters, pagination: Pagination) -> ProductListResult:
        matching = [row for row in self._store.rows(s.PRODUCTS) if self._matches(row, filters)]
        matching.sort(key=lambda row: s.decode_time(row[s.CREATED_AT]), reverse=True)

        page = matching[pagination.offset : pagination.offset + pagination.limit]
        total = len(matching)
        return ProductListResult(
            products=[self._to_read_model(row) for row in page],
            total_count=total,
            has_more=pagination.offset + len(page) < total,
        )

    def count_by_category(self, category: str) -> int:
        return sum(
            1
            for row in self._store.rows(s.PRODUCTS)
            if row[s.CATEGORY] == category and row[s.STATUS] != _ARCHIVED
        )

    # --- Filtering ------------------------------------------------------------

    @staticmethod
    def _matches(row: Row, filters: ProductListFilters) -> bool:
        status = row[s.STATUS]
        if filters.active_only:
            if status != ProductStatus.ACTIVE.value:
                return False
        elif filters.status is not None:
            if status != filters.status:
                return False
        elif status == _ARCHIVED:
            # Archived rows only show up when asked for by status.
            return False

        if filters.category and row[s.CATEGORY] != filters.category:
            return False
        return True

    # --- Mapping --------------------------------------------------------------

    def _to_read_model(self, row: Row) -> ProductReadModel:
        base_num = row[s.BASE_PRICE_NUMERATOR]
        base_den = row[s.BASE_PRICE_DENOMINATOR]
        percent = row.get(s.DISCOUNT_PERCENT)
        start = s.decode_time(row.get(s.DISCOUNT_START_DATE))
        end = s.decode_time(row.get(s.DISCOUNT_END_DATE))

        eff_num, eff_den = effective_price(
            base_num, base_den, percent, start, end, self._clock.now()
        )

        return ProductReadModel(
            id=row[s.PRODUCT_ID],
            name=row[s.NAME],
            description=row.get(s.DESCRIPTION) or "",
            category=row[s.CATEGORY],
            base_price_numerator=base_num,
            base_price_denominator=base_den,
            effective_price_numerator=eff_num,
            effective_price_denominator=eff_den,
            status=row[s.STATUS],
            created_at=s.decode_time(row[s.CREATED_AT]),
            updated_at=s.decode_time(row[s.UPDATED_AT]),
            discount_percent=int(percent) if percent is not None else None,
            discount_start=start,
            discount_end=end,
            archived_at=s.decode_time(row.get(s.ARCHIVED_AT)),
        )
