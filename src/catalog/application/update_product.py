"""Application service: Update Product use case."""

from __future__ import annotations

from catalog.application.clock import Clock
from catalog.application.persist_product import ProductPersister
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        persister: ProductPersister,
        clock: Clock,
    ) -> None:
        self._product_repo = product_repo
        self._persister = persister
        self._clock = clock

    def handle(self, product_id: str, name: str, description: str, category: str) -> None:
        """Replace a product's details.

        Submitting the current values is accepted and writes nothing.
        """
        product = self._product_repo.get_by_id(product_id)
        product.update(name, description, category, self._clock.now())
        self._persister.save(product)
