"""Application service: Quote Price use case (query).

Loads the aggregate rather than the read model so the breakdown comes
from the same pricing rules the commands enforce.
"""

from __future__ import annotations

from catalog.application.clock import Clock
from catalog.application.dto import PriceQuoteDTO
from catalog.domain.exceptions import InvalidQuantityError
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.pricing_calculator import PricingCalculator


class QuotePriceHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        calculator: PricingCalculator,
        clock: Clock,
    ) -> None:
        self._product_repo = product_repo
        self._calculator = calculator
        self._clock = clock

    def handle(self, product_id: str, quantity: int = 1) -> PriceQuoteDTO:
        """Price ``quantity`` units of a product at the current instant."""
        if quantity < 1:
            raise InvalidQuantityError()

        product = self._product_repo.get_by_id(product_id)
        now = self._clock.now()
        breakdown = self._calculator.price_breakdown(product, now)
        discount = product.discount if breakdown.has_discount else None

        return PriceQuoteDTO(
            product_id=product.id,
            quantity=quantity,
            base_price=str(breakdown.base_price),
            discount_percent=breakdown.discount_percent,
            discount_amount=str(breakdown.discount_amount),
            effective_price=str(breakdown.effective_price),
            total=str(breakdown.effective_price.multiply(quantity)),
            savings=str(self._calculator.savings(product.base_price, discount, quantity)),
            quoted_at=now,
        )
