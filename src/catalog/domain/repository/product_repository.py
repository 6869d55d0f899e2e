"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Write methods return an Operation instead of applying
it, so a use case can put the product row and its outbox rows into one
atomic commit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product
from catalog.domain.repository.operations import Operation


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product:
        """Return a product by its ID, raising ProductNotFoundError if absent."""

    @abstractmethod
    def insert_op(self, product: Product) -> Operation | None:
        """Return the insert for a new product, or None if it is not new."""

    @abstractmethod
    def update_op(self, product: Product) -> Operation | None:
        """Return an update limited to dirty fields.

        None if the product is new or nothing changed; never an empty update.
        """
