"""Application service: Create Product use case."""

from __future__ import annotations

import uuid
from typing import Callable

from catalog.application.clock import Clock
from catalog.application.persist_product import ProductPersister
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money


def new_product_id() -> str:
    return str(uuid.uuid4())


class CreateProductHandler:

    def __init__(
        self,
        persister: ProductPersister,
        clock: Clock,
        id_factory: Callable[[], str] = new_product_id,
    ) -> None:
        self._persister = persister
        self._clock = clock
        self._id_factory = id_factory

    def handle(
        self,
        name: str,
        description: str,
        category: str,
        price_numerator: int,
        price_denominator: int,
    ) -> str:
        """Create a DRAFT product and return its new ID."""
        base_price = Money.of(price_numerator, price_denominator)
        product = Product.create(
            product_id=self._id_factory(),
            name=name,
            description=description,
            category=category,
            base_price=base_price,
            now=self._clock.now(),
        )
        self._persister.save(product)
        return product.id
