"""Application service: Get Product use case (query)."""

from __future__ import annotations

from catalog.application.dto import ProductDTO
from catalog.application.read_model import ProductReadModel, ReadModelRepository
from catalog.domain.model.value_objects import Money


class GetProductHandler:

    def __init__(self, read_model: ReadModelRepository) -> None:
        self._read_model = read_model

    def handle(self, product_id: str) -> ProductDTO:
        return self._to_dto(self._read_model.get_by_id(product_id))

    @staticmethod
    def _to_dto(rm: ProductReadModel) -> ProductDTO:
        return ProductDTO(
            id=rm.id,
            name=rm.name,
            description=rm.description,
            category=rm.category,
            status=rm.status,
            base_price=str(Money.of(rm.base_price_numerator, rm.base_price_denominator)),
            effective_price=str(
                Money.of(rm.effective_price_numerator, rm.effective_price_denominator)
            ),
            base_price_numerator=rm.base_price_numerator,
            base_price_denominator=rm.base_price_denominator,
            effective_price_numerator=rm.effective_price_numerator,
            effective_price_denominator=rm.effective_price_denominator,
            discount_percent=rm.discount_percent,
            discount_start=rm.discount_start,
            discount_end=rm.discount_end,
            has_active_discount=rm.has_active_discount,
            created_at=rm.created_at,
            updated_at=rm.updated_at,
            archived_at=rm.archived_at,
        )
