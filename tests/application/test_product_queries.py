"""Integration tests for the GetProduct / ListProducts queries."""

from __future__ import annotations

from datetime import timedelta

import pytest

from catalog.application.activate_product import ActivateProductHandler
from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.archive_product import ArchiveProductHandler
from catalog.application.create_product import CreateProductHandler
from catalog.application.deactivate_product import DeactivateProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.persist_product import ProductPersister
from catalog.application.read_model import Pagination, effective_price
from catalog.domain.exceptions import InvalidStatusError, ProductNotFoundError
from catalog.infrastructure.persistence.committer import StoreCommitter
from catalog.infrastructure.persistence.outbox_repository import StoreOutboxRepository
from catalog.infrastructure.persistence.product_repository import StoreProductRepository
from catalog.infrastructure.persistence.read_model_repository import (
    StoreReadModelRepository,
)
from tests.fakes import FakeStore, FixedClock, sequential_ids


class _Seeder:
    """Drives the command side to put products into given states."""

    def __init__(self, store: FakeStore, clock: FixedClock) -> None:
        products = StoreProductRepository(store)
        persister = ProductPersister(
            products, StoreOutboxRepository(store, clock), StoreCommitter(store)
        )
        self.clock = clock
        self.create = CreateProductHandler(persister, clock, id_factory=sequential_ids())
        self.activate = ActivateProductHandler(products, persister, clock)
        self.deactivate = DeactivateProductHandler(products, persister, clock)
        self.archive = ArchiveProductHandler(products, persister, clock)
        self.discount = ApplyDiscountHandler(products, persister, clock)

    def product(self, status: str, category: str = "tools", price=(10000, 100)) -> str:
        product_id = self.create.handle(f"Item {status}", "", category, *price)
        # Spread creation times so newest-first ordering is deterministic.
        self.clock.advance(minutes=1)
        if status in ("active", "inactive"):
            self.activate.handle(product_id)
        if status == "inactive":
            self.deactivate.handle(product_id)
        if status == "archived":
            self.archive.handle(product_id)
        return product_id


def _setup():
    store = FakeStore()
    clock = FixedClock()
    read_model = StoreReadModelRepository(store, clock)
    return (
        _Seeder(store, clock),
        GetProductHandler(read_model),
        ListProductsHandler(read_model),
        clock,
    )


def _seed_mixed(seeder: _Seeder) -> list[str]:
    active = [seeder.product("active") for _ in range(3)]
    seeder.product("inactive")
    seeder.product("archived")
    seeder.product("active", category="garden")
    return active


class TestGetProduct:

    def test_projection_fields(self):
        seeder, get, _, _ = _setup()
        product_id = seeder.product("draft", price=(1999, 100))

        dto = get.handle(product_id)
        assert dto.id == product_id
        assert dto.status == "draft"
        assert dto.base_price == "19.99"
        assert dto.effective_price == "19.99"
        assert (dto.base_price_numerator, dto.base_price_denominator) == (1999, 100)
        assert dto.discount_percent is None
        assert not dto.has_active_discount

    def test_unknown_id(self):
        _, get, _, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            get.handle("nope")

    def test_effective_price_uses_query_time(self):
        seeder, get, _, clock = _setup()
        product_id = seeder.product("active", price=(1999, 100))
        start = clock.now()
        seeder.discount.handle(product_id, 20, start, start + timedelta(days=1))

        dto = get.handle(product_id)
        assert dto.has_active_discount
        assert (dto.effective_price_numerator, dto.effective_price_denominator) == (
            1999 * 80,
            10000,
        )
        assert dto.effective_price == "15.99"
        assert dto.discount_percent == 20

        clock.advance(days=2)
        dto = get.handle(product_id)
        assert not dto.has_active_discount
        assert dto.effective_price == "19.99"
        assert dto.discount_percent == 20

    def test_future_discount_not_yet_applied(self):
        seeder, get, _, clock = _setup()
        product_id = seeder.product("active")
        start = clock.now() + timedelta(days=1)
        seeder.discount.handle(product_id, 50, start, start + timedelta(days=1))

        assert get.handle(product_id).effective_price == "100.00"
        clock.set(start)
        assert get.handle(product_id).effective_price == "50.00"

    def test_archived_product_still_readable_by_id(self):
        seeder, get, _, _ = _setup()
        product_id = seeder.product("archived")
        dto = get.handle(product_id)
        assert dto.status == "archived"
        assert dto.archived_at is not None


class TestListProducts:

    def test_active_only_in_category(self):
        seeder, _, list_products, _ = _setup()
        active = _seed_mixed(seeder)

        page = list_products.handle(category="tools", active_only=True)
        assert page.total_count == 3
        assert not page.has_more
        assert {p.id for p in page.products} == set(active)

    def test_pagination(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)

        first = list_products.handle(category="tools", active_only=True, limit=2)
        assert len(first.products) == 2
        assert first.total_count == 3
        assert first.has_more

        second = list_products.handle(category="tools", active_only=True, limit=2, offset=2)
        assert len(second.products) == 1
        assert second.total_count == 3
        assert not second.has_more
        assert not {p.id for p in first.products} & {p.id for p in second.products}

    def test_newest_first(self):
        seeder, _, list_products, _ = _setup()
        active = _seed_mixed(seeder)
        page = list_products.handle(category="tools", active_only=True)
        assert [p.id for p in page.products] == list(reversed(active))

    def test_archived_excluded_by_default(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        page = list_products.handle(category="tools")
        assert page.total_count == 4
        assert "archived" not in {p.status for p in page.products}

    def test_archived_listed_when_requested(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        page = list_products.handle(status="archived")
        assert page.total_count == 1
        assert page.products[0].status == "archived"

    def test_status_filter(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        assert list_products.handle(status="inactive").total_count == 1
        assert list_products.handle(status="active").total_count == 4

    def test_active_only_overrides_status(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        assert list_products.handle(status="inactive", active_only=True).total_count == 4

    def test_unknown_status_rejected(self):
        _, _, list_products, _ = _setup()
        with pytest.raises(InvalidStatusError):
            list_products.handle(status="deleted")

    def test_default_and_clamped_limits(self):
        _, _, list_products, _ = _setup()
        assert list_products.handle().limit == 20
        assert list_products.handle(limit=0).limit == 20
        assert list_products.handle(limit=500).limit == 100

    def test_offset_beyond_total(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        page = list_products.handle(offset=50)
        assert page.products == []
        assert page.total_count == 5
        assert not page.has_more

    def test_count_by_category_excludes_archived(self):
        seeder, _, list_products, _ = _setup()
        _seed_mixed(seeder)
        assert list_products.count_by_category("tools") == 4
        assert list_products.count_by_category("garden") == 1
        assert list_products.count_by_category("kitchen") == 0


class TestReadModelHelpers:

    def test_pagination_defaults(self):
        assert Pagination.of(None, None) == Pagination(limit=20, offset=0)
        assert Pagination.of(-3, -1) == Pagination(limit=20, offset=0)
        assert Pagination.of(101, 5) == Pagination(limit=100, offset=5)

    def test_effective_price_without_discount(self):
        now = FixedClock().now()
        assert effective_price(1999, 100, None, None, None, now) == (1999, 100)

    def test_effective_price_inclusive_window(self):
        now = FixedClock().now()
        assert effective_price(1999, 100, 20, now, now, now) == (1999 * 80, 10000)
