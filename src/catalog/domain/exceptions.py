"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The hierarchy mirrors how a transport maps failures:

- ``EntityNotFoundError``  -> not found
- ``ValidationError``      -> malformed input
- ``BusinessRuleError``    -> operation not allowed in the current state
- ``InfrastructureError``  -> storage / serialization failures (opaque)
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ValidationError(DomainException):
    """Input failed an invariant at a construction or update boundary."""

    default_message = "invalid value"


class BusinessRuleError(DomainException):
    """The operation is not permitted given the aggregate's current state."""

    default_message = "operation not permitted"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    default_message = "entity not found"


class ProductNotFoundError(EntityNotFoundError):
    default_message = "product not found"


# --- Money ------------------------------------------------------------------


class InvalidMoneyError(ValidationError):
    default_message = "invalid money value"


class NegativeMoneyError(ValidationError):
    default_message = "money cannot be negative"


# --- Product validation -----------------------------------------------------


class EmptyNameError(ValidationError):
    default_message = "product name cannot be empty"


class NameTooLongError(ValidationError):
    default_message = "product name exceeds maximum length"


class EmptyCategoryError(ValidationError):
    default_message = "category cannot be empty"


class CategoryTooLongError(ValidationError):
    default_message = "category exceeds maximum length"


class ZeroPriceError(ValidationError):
    default_message = "price cannot be zero"


class InvalidStatusError(ValidationError):
    default_message = "invalid product status"


class InvalidQuantityError(ValidationError):
    default_message = "quantity must be at least 1"


# --- Discount validation ----------------------------------------------------


class InvalidDiscountPercentageError(ValidationError):
    default_message = "discount percentage must be between 1 and 100"


class InvalidDiscountPeriodError(ValidationError):
    default_message = "discount end date must be after start date"


# --- State transitions ------------------------------------------------------


class ProductNotActiveError(BusinessRuleError):
    default_message = "product is not active"


class ProductAlreadyActiveError(BusinessRuleError):
    default_message = "product is already active"


class ProductAlreadyInactiveError(BusinessRuleError):
    default_message = "product is already inactive"


class ProductAlreadyArchivedError(BusinessRuleError):
    default_message = "product is archived"


class MustDeactivateFirstError(BusinessRuleError):
    default_message = "must deactivate product before archiving"


class CannotActivateArchivedError(BusinessRuleError):
    default_message = "cannot activate archived product"


class CannotDeactivateArchivedError(BusinessRuleError):
    default_message = "cannot deactivate archived product"


class CannotUpdateArchivedError(BusinessRuleError):
    default_message = "cannot update archived product"


class NoDiscountToRemoveError(BusinessRuleError):
    default_message = "product has no discount to remove"


class DiscountExpiredError(BusinessRuleError):
    default_message = "discount period has expired"


# --- Infrastructure ---------------------------------------------------------


class InfrastructureError(Exception):
    """Base class for failures outside the domain (storage, encoding)."""


class StorageError(InfrastructureError):
    """The storage backend rejected or failed to apply an operation."""


class EventSerializationError(InfrastructureError):
    """A domain event could not be turned into an outbox payload."""


def error_kind(exc: BaseException) -> str:
    """Classify an exception for a transport boundary.

    Returns one of ``not_found``, ``validation``, ``conflict`` or
    ``internal``.
    """
    if isinstance(exc, EntityNotFoundError):
        return "not_found"
    if isinstance(exc, ValidationError):
        return "validation"
    if isinstance(exc, BusinessRuleError):
        return "conflict"
    return "internal"
