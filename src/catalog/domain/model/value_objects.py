"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from catalog.domain.exceptions import (
    InvalidDiscountPercentageError,
    InvalidDiscountPeriodError,
    InvalidMoneyError,
    NegativeMoneyError,
)


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative monetary amount held as an exact rational.

    Uses Fraction rather than Decimal so percentage discounts never round:
    20% off 19.99 is exactly 1999*80/10000, not an approximation.
    """

    amount: Fraction

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Fraction):
            raise InvalidMoneyError(
                f"Money amount must be a Fraction, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise NegativeMoneyError()

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(numerator: int, denominator: int = 1) -> Money:
        """Build a value from a numerator/denominator pair, e.g. ``Money.of(1999, 100)``."""
        if denominator == 0:
            raise InvalidMoneyError("money denominator cannot be zero")
        if numerator < 0:
            raise NegativeMoneyError()
        # A negative denominator is caught by __post_init__.
        return Money(Fraction(numerator, denominator))

    @staticmethod
    def zero() -> Money:
        return Money(Fraction(0))

    # --- Accessors ------------------------------------------------------------

    @property
    def numerator(self) -> int:
        return self.amount.numerator

    @property
    def denominator(self) -> int:
        return self.amount.denominator

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def subtract(self, other: Money) -> Money:
        result = self.amount - other.amount
        if result < 0:
            raise NegativeMoneyError("Money subtraction would result in a negative amount")
        return Money(result)

    def multiply(self, factor: int | Fraction) -> Money:
        if not isinstance(factor, (int, Fraction)):
            raise TypeError(
                f"Can only multiply Money by int or Fraction, got {type(factor).__name__}"
            )
        if factor < 0:
            raise NegativeMoneyError("Cannot multiply money by a negative factor")
        return Money(self.amount * factor)

    def apply_percentage(self, percentage: int) -> Money:
        """Return ``percentage``% of this amount (20 -> one fifth)."""
        return Money(self.amount * Fraction(percentage, 100))

    def subtract_percentage(self, percentage: int) -> Money:
        """Return this amount with ``percentage``% taken off."""
        return Money(self.amount - self.amount * Fraction(percentage, 100))

    def greater_than(self, other: Money) -> bool:
        return self.amount > other.amount

    def less_than(self, other: Money) -> bool:
        return self.amount < other.amount

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        exact = Decimal(self.amount.numerator) / Decimal(self.amount.denominator)
        return str(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Discount:
    """A percentage-off offer valid from ``start`` to ``end`` inclusive."""

    percentage: int
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if isinstance(self.percentage, bool) or not isinstance(self.percentage, int):
            raise InvalidDiscountPercentageError(
                f"Discount percentage must be an integer, got {type(self.percentage).__name__}"
            )
        if not 1 <= self.percentage <= 100:
            raise InvalidDiscountPercentageError()
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise InvalidDiscountPeriodError("discount dates must be timezone-aware")
        if self.end < self.start:
            raise InvalidDiscountPeriodError()

    def is_valid_at(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def is_expired(self, moment: datetime) -> bool:
        return moment > self.end

    def has_started(self, moment: datetime) -> bool:
        return moment >= self.start

    def apply(self, price: Money) -> Money:
        return price.subtract_percentage(self.percentage)

    def __str__(self) -> str:
        return f"{self.percentage}% ({self.start.isoformat()} .. {self.end.isoformat()})"
