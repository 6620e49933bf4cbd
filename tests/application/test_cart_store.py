"""Tests for the session Cart Store: edits, persistence and restore."""

import json
import threading

import pytest

from storefront.application.cart_store import CART_KEY, CartStore
from storefront.domain.exceptions import StorageError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository, InMemorySessionStorage


def _catalog() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id="1", name="Widget", price=Money.of("10.00")),
        Product(id="2", name="Gadget", price=Money.of("5.00")),
    ])


def _setup(data: dict[str, str] | None = None):
    storage = InMemorySessionStorage(data)
    catalog = _catalog()
    return CartStore(storage, catalog), storage, catalog


def _persisted(storage: InMemorySessionStorage) -> list[dict]:
    return json.loads(storage.data[CART_KEY])


class TestCartStoreEdits:

    def test_add_then_totals(self):
        store, _, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        store.add_item(catalog.get_by_id("2"), 1)
        assert store.subtotal == Money.of("25.00")
        assert store.total_items == 3

    def test_add_merges_existing_line(self):
        store, _, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        store.add_item(catalog.get_by_id("1"), 3)
        assert len(store.lines) == 1
        assert store.lines[0].quantity == 5

    def test_add_rejects_zero_quantity(self):
        store, storage, catalog = _setup()
        with pytest.raises(ValidationError):
            store.add_item(catalog.get_by_id("1"), 0)
        assert store.is_empty
        assert CART_KEY not in storage.data

    @pytest.mark.parametrize("qty", [0, -5])
    def test_update_to_zero_or_less_removes(self, qty):
        store, storage, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        store.update_quantity("1", qty)
        assert store.is_empty
        assert _persisted(storage) == []

    def test_update_unknown_product_is_noop(self):
        store, storage, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        before = storage.data[CART_KEY]
        store.update_quantity("99", 4)
        assert storage.data[CART_KEY] == before
        assert store.total_items == 2

    def test_add_then_remove_restores_subtotal(self):
        store, _, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 1)
        before = store.subtotal
        store.add_item(catalog.get_by_id("2"), 3)
        store.remove_item("2")
        assert store.subtotal == before

    def test_lines_is_a_copy(self):
        store, _, catalog = _setup()
        store.add_item(catalog.get_by_id("1"))
        store.lines.clear()
        assert len(store.lines) == 1


class TestCartStorePersistence:

    def test_every_mutation_persists(self):
        store, storage, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        assert _persisted(storage) == [{"productId": "1", "quantity": 2}]
        store.update_quantity("1", 4)
        assert _persisted(storage) == [{"productId": "1", "quantity": 4}]
        store.remove_item("1")
        assert _persisted(storage) == []

    def test_reload_restores_same_lines(self):
        store, storage, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        store.add_item(catalog.get_by_id("2"), 1)

        reloaded = CartStore(storage, catalog)
        assert [(l.product_id, l.quantity) for l in reloaded.lines] == [("1", 2), ("2", 1)]
        assert reloaded.subtotal == store.subtotal

    def test_restore_quotes_current_prices(self):
        store, storage, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        catalog.get_by_id("1").update_price(Money.of("12.00"))

        assert CartStore(storage, catalog).subtotal == Money.of("24.00")

    def test_separate_keys_do_not_share_a_cart(self):
        storage = InMemorySessionStorage()
        catalog = _catalog()
        a = CartStore(storage, catalog, key="cart-a")
        b = CartStore(storage, catalog, key="cart-b")
        a.add_item(catalog.get_by_id("1"))
        assert b.is_empty
        assert CartStore(storage, catalog, key="cart-b").is_empty


class TestCartStoreRestoreEdgeCases:

    @pytest.mark.parametrize("raw", ["not json", "{\"productId\": \"1\"}", "42", 5, ["1"]])
    def test_malformed_data_restores_empty(self, raw):
        store, _, _ = _setup({CART_KEY: raw})
        assert store.is_empty

    def test_bad_records_are_skipped(self):
        raw = json.dumps([
            {"productId": "1", "quantity": 2},
            {"productId": "2"},
            {"productId": "2", "quantity": 0},
            {"productId": "2", "quantity": "3"},
            {"productId": "404", "quantity": 1},
            "junk",
        ])
        store, _, _ = _setup({CART_KEY: raw})
        assert [(l.product_id, l.quantity) for l in store.lines] == [("1", 2)]

    def test_numeric_product_ids_are_normalized(self):
        store, _, _ = _setup({CART_KEY: json.dumps([{"productId": 2, "quantity": 1}])})
        assert store.lines[0].product_id == "2"

    def test_unavailable_storage_restores_empty(self):
        storage = InMemorySessionStorage({CART_KEY: "[]"})
        storage.available = False
        assert CartStore(storage, _catalog()).is_empty


class TestCartStoreStorageFailures:

    def test_edits_survive_failing_writes(self):
        store, storage, catalog = _setup()
        storage.available = False
        store.add_item(catalog.get_by_id("1"), 2)
        assert store.total_items == 2

    def test_next_write_reconciles(self):
        store, storage, catalog = _setup()
        storage.available = False
        store.add_item(catalog.get_by_id("1"), 2)
        storage.available = True
        store.add_item(catalog.get_by_id("2"), 1)
        assert _persisted(storage) == [
            {"productId": "1", "quantity": 2},
            {"productId": "2", "quantity": 1},
        ]

    def test_storage_error_is_swallowed(self):
        class BrokenStorage(InMemorySessionStorage):
            def get(self, key):
                raise StorageError("corrupt session")

        store = CartStore(BrokenStorage(), _catalog())
        assert store.is_empty


class TestCartStoreSnapshot:

    def test_snapshot_isolated_from_later_edits(self):
        store, _, catalog = _setup()
        store.add_item(catalog.get_by_id("1"), 2)
        snap = store.snapshot()
        store.add_item(catalog.get_by_id("2"), 1)
        store.clear_cart()
        assert snap.subtotal == Money.of("20.00")
        assert len(snap) == 1

    def test_concurrent_adds_are_not_lost(self):
        store, _, catalog = _setup()
        widget = catalog.get_by_id("1")

        def add_many():
            for _ in range(50):
                store.add_item(widget)

        threads = [threading.Thread(target=add_many) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert store.total_items == 200


class TestCheckoutNonce:

    def test_nonce_is_stable_and_persisted(self):
        store, storage, catalog = _setup()
        nonce = store.checkout_nonce()
        assert store.checkout_nonce() == nonce
        assert CartStore(storage, catalog).checkout_nonce() == nonce

    def test_clear_forgets_nonce(self):
        store, storage, _ = _setup()
        nonce = store.checkout_nonce()
        store.clear_cart()
        assert CART_KEY + ":checkout-nonce" not in storage.data
        assert store.checkout_nonce() != nonce
