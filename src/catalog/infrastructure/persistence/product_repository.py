"""Store-backed implementation of ProductRepository.

Maps the aggregate to a ``products`` row and back.  Update operations
carry only the columns behind dirty fields, plus ``updated_at``.
"""

from __future__ import annotations

from typing import Any

from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.model.change_tracker import Field
from catalog.domain.model.product import Product, ProductStatus
from catalog.domain.model.value_objects import Discount, Money
from catalog.domain.repository.operations import Insert, Operation, Update
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence import schema as s
from catalog.infrastructure.persistence.store import Row, Store


class StoreProductRepository(ProductRepository):

    def __init__(self, store: Store) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product:
        row = self._store.get(s.PRODUCTS, product_id)
        if row is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return self._to_domain(row)

    def insert_op(self, product: Product) -> Operation | None:
        if not product.is_new:
            return None
        return Insert(s.PRODUCTS, self._to_row(product))

    def update_op(self, product: Product) -> Operation | None:
        if product.is_new:
            return None

        changes = product.changes
        if not changes.has_changes():
            return None

        values: dict[str, Any] = {}
        if changes.is_dirty(Field.NAME):
            values[s.NAME] = product.name
        if changes.is_dirty(Field.DESCRIPTION):
            values[s.DESCRIPTION] = product.description
        if changes.is_dirty(Field.CATEGORY):
            values[s.CATEGORY] = product.category
        if changes.is_dirty(Field.BASE_PRICE):
            values[s.BASE_PRICE_NUMERATOR] = product.base_price.numerator
            values[s.BASE_PRICE_DENOMINATOR] = product.base_price.denominator
        if changes.is_dirty(Field.STATUS):
            values[s.STATUS] = product.status.value
        if changes.is_dirty(Field.DISCOUNT):
            values.update(self._discount_columns(product.discount))
        if changes.is_dirty(Field.ARCHIVED_AT):
            values[s.ARCHIVED_AT] = s.encode_time(product.archived_at)

        if not values:
            return None

        values[s.UPDATED_AT] = s.encode_time(product.updated_at)
        return Update(s.PRODUCTS, product.id, values)

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_row(cls, product: Product) -> Row:
        row: Row = {
            s.PRODUCT_ID: product.id,
            s.NAME: product.name,
            s.DESCRIPTION: product.description,
            s.CATEGORY: product.category,
            s.BASE_PRICE_NUMERATOR: product.base_price.numerator,
            s.BASE_PRICE_DENOMINATOR: product.base_price.denominator,
            s.STATUS: product.status.value,
            s.CREATED_AT: s.encode_time(product.created_at),
            s.UPDATED_AT: s.encode_time(product.updated_at),
            s.ARCHIVED_AT: s.encode_time(product.archived_at),
        }
        row.update(cls._discount_columns(product.discount))
        return row

    @staticmethod
    def _discount_columns(discount: Discount | None) -> Row:
        if discount is None:
            return {
                s.DISCOUNT_PERCENT: None,
                s.DISCOUNT_START_DATE: None,
                s.DISCOUNT_END_DATE: None,
            }
        return {
            s.DISCOUNT_PERCENT: discount.percentage,
            s.DISCOUNT_START_DATE: s.encode_time(discount.start),
            s.DISCOUNT_END_DATE: s.encode_time(discount.end),
        }

    @staticmethod
    def _to_domain(row: Row) -> Product:
        discount = None
        if (
            row.get(s.DISCOUNT_PERCENT) is not None
            and row.get(s.DISCOUNT_START_DATE) is not None
            and row.get(s.DISCOUNT_END_DATE) is not None
        ):
            discount = Discount(
                percentage=int(row[s.DISCOUNT_PERCENT]),
                start=s.decode_time(row[s.DISCOUNT_START_DATE]),
                end=s.decode_time(row[s.DISCOUNT_END_DATE]),
            )

        return Product.reconstitute(
            product_id=row[s.PRODUCT_ID],
            name=row[s.NAME],
            description=row.get(s.DESCRIPTION) or "",
            category=row[s.CATEGORY],
            base_price=Money.of(row[s.BASE_PRICE_NUMERATOR], row[s.BASE_PRICE_DENOMINATOR]),
            discount=discount,
            status=ProductStatus(row[s.STATUS]),
            created_at=s.decode_time(row[s.CREATED_AT]),
            updated_at=s.decode_time(row[s.UPDATED_AT]),
            archived_at=s.decode_time(row.get(s.ARCHIVED_AT)),
        )
