"""Application service: Apply Discount use case.

The Discount value object validates percentage and period before the
product is asked to accept it, so malformed input never reaches the
aggregate.
"""

from __future__ import annotations

from datetime import datetime

from catalog.application.clock import Clock
from catalog.application.persist_product import ProductPersister
from catalog.domain.model.value_objects import Discount
from catalog.domain.repository.product_repository import ProductRepository


class ApplyDiscountHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        persister: ProductPersister,
        clock: Clock,
    ) -> None:
        self._product_repo = product_repo
        self._persister = persister
        self._clock = clock

    def handle(
        self,
        product_id: str,
        percentage: int,
        start: datetime,
        end: datetime,
    ) -> None:
        product = self._product_repo.get_by_id(product_id)
        discount = Discount(percentage=percentage, start=start, end=end)
        product.apply_discount(discount, self._clock.now())
        self._persister.save(product)
