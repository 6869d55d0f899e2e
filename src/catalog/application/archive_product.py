"""Application service: Archive Product use case."""

from __future__ import annotations

from catalog.application.clock import Clock
from catalog.application.persist_product import ProductPersister
from catalog.domain.repository.product_repository import ProductRepository


class ArchiveProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        persister: ProductPersister,
        clock: Clock,
    ) -> None:
        self._product_repo = product_repo
        self._persister = persister
        self._clock = clock

    def handle(self, product_id: str) -> None:
        """Soft-delete a DRAFT or INACTIVE product."""
        product = self._product_repo.get_by_id(product_id)
        product.archive(self._clock.now())
        self._persister.save(product)
