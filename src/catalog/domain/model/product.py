"""Product aggregate.

Products move through a small lifecycle::

    DRAFT ----> ACTIVE <----> INACTIVE
      |                          |
      +--------> ARCHIVED <------+

ARCHIVED is terminal, and an ACTIVE product must be deactivated before
it can be archived.  Discounts may only be attached while ACTIVE.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from catalog.domain.exceptions import (
    CannotActivateArchivedError,
    CannotDeactivateArchivedError,
    CannotUpdateArchivedError,
    CategoryTooLongError,
    DiscountExpiredError,
    EmptyCategoryError,
    EmptyNameError,
    MustDeactivateFirstError,
    NameTooLongError,
    NoDiscountToRemoveError,
    ProductAlreadyActiveError,
    ProductAlreadyArchivedError,
    ProductAlreadyInactiveError,
    ProductNotActiveError,
    ZeroPriceError,
)
from catalog.domain.model.change_tracker import ChangeTracker, Field
from catalog.domain.model.events import (
    DiscountApplied,
    DiscountRemoved,
    DomainEvent,
    ProductActivated,
    ProductArchived,
    ProductCreated,
    ProductDeactivated,
    ProductUpdated,
)
from catalog.domain.model.value_objects import Discount, Money

MAX_NAME_LENGTH = 255
MAX_CATEGORY_LENGTH = 100


class ProductStatus(Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class ProductChange:
    """Outcome of one mutating call on a Product.

    ``event`` is None only when the call turned out to be a no-op
    (an ``update`` with identical values).
    """

    product: Product
    dirty_fields: frozenset[Field]
    event: DomainEvent | None

    @property
    def changed(self) -> bool:
        return self.event is not None


@dataclass
class Product:
    """Aggregate root for the catalog.

    Use ``Product.create()`` for new products; it validates input and
    records a ``ProductCreated`` event.  ``Product.reconstitute()`` is
    for the repository: no validation, no events, ``is_new`` False.
    """

    id: str
    name: str
    description: str
    category: str
    base_price: Money
    status: ProductStatus
    created_at: datetime
    updated_at: datetime
    discount: Discount | None = None
    archived_at: datetime | None = None
    is_new: bool = False

    changes: ChangeTracker = field(default_factory=ChangeTracker, repr=False, compare=False)
    domain_events: list[DomainEvent] = field(default_factory=list, repr=False, compare=False)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        description: str,
        category: str,
        base_price: Money | None,
        now: datetime,
    ) -> Product:
        """Create a new DRAFT product, enforcing all invariants."""
        _validate_details(name, category)
        if base_price is None or not base_price.is_positive:
            raise ZeroPriceError()

        product = Product(
            id=product_id,
            name=name,
            description=description,
            category=category,
            base_price=base_price,
            status=ProductStatus.DRAFT,
            created_at=now,
            updated_at=now,
            is_new=True,
        )
        product.domain_events.append(
            ProductCreated(
                aggregate_id=product_id,
                occurred_at=now,
                name=name,
                description=description,
                category=category,
                base_price=base_price,
            )
        )
        return product

    @staticmethod
    def reconstitute(
        product_id: str,
        name: str,
        description: str,
        category: str,
        base_price: Money,
        discount: Discount | None,
        status: ProductStatus,
        created_at: datetime,
        updated_at: datetime,
        archived_at: datetime | None,
    ) -> Product:
        return Product(
            id=product_id,
            name=name,
            description=description,
            category=category,
            base_price=base_price,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            discount=discount,
            archived_at=archived_at,
            is_new=False,
        )

    # --- Queries --------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @property
    def is_archived(self) -> bool:
        return self.status == ProductStatus.ARCHIVED

    def effective_price(self, now: datetime) -> Money:
        """Base price, reduced by the discount only while it is valid at ``now``."""
        if self.discount is None or not self.discount.is_valid_at(now):
            return self.base_price
        return self.discount.apply(self.base_price)

    def has_active_discount(self, now: datetime) -> bool:
        return self.discount is not None and self.discount.is_valid_at(now)

    # --- Details --------------------------------------------------------------

    def update(self, name: str, description: str, category: str, now: datetime) -> ProductChange:
        """Replace name, description and category.

        Only fields whose value actually differs are marked dirty, and the
        ``ProductUpdated`` event is emitted only if at least one did.
        """
        if self.is_archived:
            raise CannotUpdateArchivedError()
        _validate_details(name, category)

        dirty: set[Field] = set()
        if self.name != name:
            self.name = name
            dirty.add(Field.NAME)
        if self.description != description:
            self.description = description
            dirty.add(Field.DESCRIPTION)
        if self.category != category:
            self.category = category
            dirty.add(Field.CATEGORY)

        if not dirty:
            return ProductChange(product=self, dirty_fields=frozenset(), event=None)

        return self._record(
            now,
            dirty,
            ProductUpdated(
                aggregate_id=self.id,
                occurred_at=now,
                name=name,
                description=description,
                category=category,
            ),
        )

    # --- State transitions ----------------------------------------------------

    def activate(self, now: datetime) -> ProductChange:
        """DRAFT|INACTIVE -> ACTIVE."""
        if self.is_archived:
            raise CannotActivateArchivedError()
        if self.is_active:
            raise ProductAlreadyActiveError()

        self.status = ProductStatus.ACTIVE
        return self._record(now, {Field.STATUS}, ProductActivated(self.id, now))

    def deactivate(self, now: datetime) -> ProductChange:
        """DRAFT|ACTIVE -> INACTIVE."""
        if self.is_archived:
            raise CannotDeactivateArchivedError()
        if self.status == ProductStatus.INACTIVE:
            raise ProductAlreadyInactiveError()

        self.status = ProductStatus.INACTIVE
        return self._record(now, {Field.STATUS}, ProductDeactivated(self.id, now))

    def archive(self, now: datetime) -> ProductChange:
        """DRAFT|INACTIVE -> ARCHIVED (soft delete)."""
        if self.is_archived:
            raise ProductAlreadyArchivedError()
        if self.is_active:
            raise MustDeactivateFirstError()

        self.status = ProductStatus.ARCHIVED
        self.archived_at = now
        return self._record(
            now, {Field.STATUS, Field.ARCHIVED_AT}, ProductArchived(self.id, now)
        )

    # --- Discounts ------------------------------------------------------------

    def apply_discount(self, discount: Discount, now: datetime) -> ProductChange:
        """Attach ``discount``, replacing any existing one.

        Future-dated discounts are accepted so they can be scheduled ahead
        of their start.
        """
        if not self.is_active:
            raise ProductNotActiveError()

        if not discount.is_valid_at(now) and not discount.has_started(now):
            if discount.is_expired(now):
                raise DiscountExpiredError()

        self.discount = discount
        return self._record(
            now,
            {Field.DISCOUNT},
            DiscountApplied(
                aggregate_id=self.id,
                occurred_at=now,
                percentage=discount.percentage,
                start=discount.start,
                end=discount.end,
            ),
        )

    def remove_discount(self, now: datetime) -> ProductChange:
        if self.discount is None:
            raise NoDiscountToRemoveError()

        self.discount = None
        return self._record(now, {Field.DISCOUNT}, DiscountRemoved(self.id, now))

    # --- Events ---------------------------------------------------------------

    def clear_events(self) -> None:
        self.domain_events.clear()

    # --- Internal helpers -----------------------------------------------------

    def _record(self, now: datetime, dirty: set[Field], event: DomainEvent) -> ProductChange:
        self.updated_at = now
        for f in dirty:
            self.changes.mark_dirty(f)
        self.domain_events.append(event)
        return ProductChange(product=self, dirty_fields=frozenset(dirty), event=event)


def _validate_details(name: str, category: str) -> None:
    if not name or not name.strip():
        raise EmptyNameError()
    if len(name) > MAX_NAME_LENGTH:
        raise NameTooLongError(f"product name exceeds {MAX_NAME_LENGTH} characters")
    if not category or not category.strip():
        raise EmptyCategoryError()
    if len(category) > MAX_CATEGORY_LENGTH:
        raise CategoryTooLongError(f"category exceeds {MAX_CATEGORY_LENGTH} characters")
