"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
``build_application`` is called once at startup and the resulting
``Application`` is passed down explicitly; nothing looks it up globally.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.application.activate_product import ActivateProductHandler
from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.archive_product import ArchiveProductHandler
from catalog.application.clock import Clock, SystemClock
from catalog.application.create_product import CreateProductHandler
from catalog.application.deactivate_product import DeactivateProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.persist_product import ProductPersister
from catalog.application.quote_price import QuotePriceHandler
from catalog.application.remove_discount import RemoveDiscountHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.service.pricing_calculator import PricingCalculator
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.committer import StoreCommitter
from catalog.infrastructure.persistence.json_store import JsonStore
from catalog.infrastructure.persistence.outbox_repository import StoreOutboxRepository
from catalog.infrastructure.persistence.product_repository import StoreProductRepository
from catalog.infrastructure.persistence.read_model_repository import (
    StoreReadModelRepository,
)
from catalog.infrastructure.persistence.store import Store


@dataclass(frozen=True)
class Application:
    """Every component the transports need, constructed once."""

    settings: Settings
    outbox: StoreOutboxRepository
    create_product: CreateProductHandler
    update_product: UpdateProductHandler
    activate_product: ActivateProductHandler
    deactivate_product: DeactivateProductHandler
    archive_product: ArchiveProductHandler
    apply_discount: ApplyDiscountHandler
    remove_discount: RemoveDiscountHandler
    get_product: GetProductHandler
    list_products: ListProductsHandler
    quote_price: QuotePriceHandler


def build_application(
    settings: Settings,
    store: Store | None = None,
    clock: Clock | None = None,
) -> Application:
    store = store if store is not None else JsonStore(settings.database_file)
    clock = clock if clock is not None else SystemClock()

    product_repo = StoreProductRepository(store)
    outbox_repo = StoreOutboxRepository(store, clock)
    read_model = StoreReadModelRepository(store, clock)
    persister = ProductPersister(product_repo, outbox_repo, StoreCommitter(store))

    return Application(
        settings=settings,
        outbox=outbox_repo,
        create_product=CreateProductHandler(persister, clock),
        update_product=UpdateProductHandler(product_repo, persister, clock),
        activate_product=ActivateProductHandler(product_repo, persister, clock),
        deactivate_product=DeactivateProductHandler(product_repo, persister, clock),
        archive_product=ArchiveProductHandler(product_repo, persister, clock),
        apply_discount=ApplyDiscountHandler(product_repo, persister, clock),
        remove_discount=RemoveDiscountHandler(product_repo, persister, clock),
        get_product=GetProductHandler(read_model),
        list_products=ListProductsHandler(read_model),
        quote_price=QuotePriceHandler(product_repo, PricingCalculator(), clock),
    )
