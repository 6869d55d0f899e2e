"""Tests for the JSON-file store and the repositories on top of it."""

from __future__ import annotations

import json
import threading
from datetime import timedelta

import pytest

from catalog.domain.exceptions import EventSerializationError, StorageError
from catalog.domain.model.events import ProductActivated
from catalog.domain.model.product import Product, ProductStatus
from catalog.domain.model.value_objects import Discount, Money
from catalog.domain.repository.operations import Insert, Update
from catalog.infrastructure.persistence.json_store import JsonStore
from catalog.infrastructure.persistence.outbox_repository import StoreOutboxRepository
from catalog.infrastructure.persistence.product_repository import StoreProductRepository
from tests.fakes import T0, FixedClock


def _row(product_id: str = "p-1", **overrides) -> dict:
    row = {
        "product_id": product_id,
        "name": "Widget",
        "description": "",
        "category": "tools",
        "base_price_numerator": 1999,
        "base_price_denominator": 100,
        "discount_percent": None,
        "discount_start_date": None,
        "discount_end_date": None,
        "status": "draft",
        "created_at": T0.isoformat(),
        "updated_at": T0.isoformat(),
        "archived_at": None,
    }
    row.update(overrides)
    return row


class TestJsonStore:

    def test_creates_empty_document(self, tmp_path):
        path = tmp_path / "data" / "catalog.json"
        JsonStore(path)
        assert json.loads(path.read_text()) == {"products": [], "outbox_events": []}

    def test_insert_and_read_back(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        store.apply_atomic([Insert("products", _row())])

        assert store.get("products", "p-1")["name"] == "Widget"
        assert store.get("products", "p-2") is None
        assert len(store.rows("products")) == 1

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "catalog.json"
        JsonStore(path).apply_atomic([Insert("products", _row())])
        assert JsonStore(path).get("products", "p-1") is not None

    def test_update_changes_only_given_columns(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        store.apply_atomic([Insert("products", _row())])
        store.apply_atomic([Update("products", "p-1", {"status": "active"})])

        row = store.get("products", "p-1")
        assert row["status"] == "active"
        assert row["name"] == "Widget"

    def test_failed_batch_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "catalog.json"
        store = JsonStore(path)
        store.apply_atomic([Insert("products", _row())])
        before = path.read_text()

        with pytest.raises(StorageError, match="not found"):
            store.apply_atomic(
                [
                    Insert("products", _row("p-2")),
                    Update("products", "missing", {"status": "active"}),
                ]
            )

        assert path.read_text() == before
        assert store.get("products", "p-2") is None

    def test_unknown_table_rejected(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        with pytest.raises(StorageError, match="unknown table"):
            store.apply_atomic([Insert("widgets", {"id": 1})])

    def test_empty_batch_is_a_no_op(self, tmp_path):
        path = tmp_path / "catalog.json"
        store = JsonStore(path)
        before = path.read_text()
        store.apply_atomic([])
        assert path.read_text() == before

    def test_corrupt_file_reported_as_storage_error(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json")
        with pytest.raises(StorageError, match="cannot read"):
            JsonStore(path).get("products", "p-1")

    def test_writers_serialize_on_the_lock_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        holder, writer = JsonStore(path), JsonStore(path)
        worker = threading.Thread(
            target=writer.apply_atomic, args=([Insert("products", _row("p-2"))],)
        )

        with holder._locked():
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            holder._save({"products": {"p-1": _row()}, "outbox_events": {}})

        worker.join(timeout=5)
        assert not worker.is_alive()
        # The waiting batch was applied on top of the holder's write.
        assert holder.get("products", "p-1") is not None
        assert holder.get("products", "p-2") is not None
        assert holder.lock_path.exists()


class TestStoreProductRepository:

    def test_round_trip_with_discount_and_archive(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        repo = StoreProductRepository(store)
        discount = Discount(15, T0, T0 + timedelta(days=3))
        product = Product(
            id="p-1",
            name="Widget",
            description="desc",
            category="tools",
            base_price=Money.of(1, 3),
            status=ProductStatus.ARCHIVED,
            created_at=T0,
            updated_at=T0 + timedelta(hours=1),
            discount=discount,
            archived_at=T0 + timedelta(hours=1),
            is_new=True,
        )
        store.apply_atomic([repo.insert_op(product)])

        loaded = repo.get_by_id("p-1")
        assert loaded == Product.reconstitute(
            product_id="p-1",
            name="Widget",
            description="desc",
            category="tools",
            base_price=Money.of(1, 3),
            discount=discount,
            status=ProductStatus.ARCHIVED,
            created_at=T0,
            updated_at=T0 + timedelta(hours=1),
            archived_at=T0 + timedelta(hours=1),
        )
        assert not loaded.is_new

    def test_insert_op_only_for_new(self):
        repo = StoreProductRepository(store=None)
        product = Product.create("p-1", "Widget", "", "tools", Money.of(5), T0)
        assert isinstance(repo.insert_op(product), Insert)
        assert repo.update_op(product) is None

        product.is_new = False
        assert repo.insert_op(product) is None

    def test_update_op_none_without_changes(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        store.apply_atomic([Insert("products", _row())])
        repo = StoreProductRepository(store)
        assert repo.update_op(repo.get_by_id("p-1")) is None

    def test_removing_discount_nulls_columns(self, tmp_path):
        store = JsonStore(tmp_path / "catalog.json")
        store.apply_atomic(
            [
                Insert(
                    "products",
                    _row(
                        status="active",
                        discount_percent=10,
                        discount_start_date=T0.isoformat(),
                        discount_end_date=(T0 + timedelta(days=1)).isoformat(),
                    ),
                )
            ]
        )
        repo = StoreProductRepository(store)
        product = repo.get_by_id("p-1")
        assert product.discount == Discount(10, T0, T0 + timedelta(days=1))

        later = T0 + timedelta(hours=2)
        product.remove_discount(later)
        op = repo.update_op(product)
        assert op.values == {
            "discount_percent": None,
            "discount_start_date": None,
            "discount_end_date": None,
            "updated_at": later.isoformat(),
        }


class TestStoreOutboxRepository:

    def test_insert_is_pending_with_fresh_id(self):
        repo = StoreOutboxRepository(store=None, clock=FixedClock())
        first = repo.insert_from_event_op(ProductActivated("p-1", T0))
        second = repo.insert_from_event_op(ProductActivated("p-1", T0))

        assert first.table == "outbox_events"
        assert first.row["status"] == "pending"
        assert first.row["event_type"] == "product.activated"
        assert first.row["created_at"] == T0.isoformat()
        assert first.row["event_id"] != second.row["event_id"]
        assert json.loads(first.row["payload"])["aggregate_id"] == "p-1"

    def test_unserializable_event_raises(self):
        repo = StoreOutboxRepository(store=None, clock=FixedClock())
        with pytest.raises(EventSerializationError):
            repo.insert_from_event_op(object())
