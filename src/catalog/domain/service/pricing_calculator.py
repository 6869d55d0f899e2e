"""Domain service: Pricing Calculator.

Pricing questions that span a product and its discount but do not
mutate anything: how much is taken off, what a buyer saves on several
units, and a full breakdown for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from catalog.domain.exceptions import DiscountExpiredError, ProductNotActiveError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Discount, Money


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: Money
    discount_percent: int
    discount_amount: Money
    effective_price: Money
    has_discount: bool


class PricingCalculator:

    def effective_price(self, product: Product, now: datetime) -> Money:
        return product.effective_price(now)

    def discount_amount(self, base_price: Money, discount: Discount | None) -> Money:
        """Money taken off ``base_price`` by ``discount`` (zero if none)."""
        if discount is None:
            return Money.zero()
        return base_price.apply_percentage(discount.percentage)

    def savings(self, base_price: Money, discount: Discount | None, quantity: int) -> Money:
        """Total saved when buying ``quantity`` units at the discounted price."""
        if discount is None or quantity <= 0:
            return Money.zero()
        return self.discount_amount(base_price, discount).multiply(quantity)

    def price_breakdown(self, product: Product, now: datetime) -> PriceBreakdown:
        discount = product.discount
        if discount is not None and discount.is_valid_at(now):
            percent = discount.percentage
            amount = self.discount_amount(product.base_price, discount)
        else:
            percent = 0
            amount = Money.zero()

        return PriceBreakdown(
            base_price=product.base_price,
            discount_percent=percent,
            discount_amount=amount,
            effective_price=product.effective_price(now),
            has_discount=percent > 0,
        )

    def validate_discount_application(
        self, product: Product, discount: Discount, now: datetime
    ) -> None:
        """Stricter pre-check than ``Product.apply_discount``: rejects any
        discount whose window has already closed."""
        if not product.is_active:
            raise ProductNotActiveError()
        if discount.is_expired(now):
            raise DiscountExpiredError()
