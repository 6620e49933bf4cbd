"""Tests for the order query use cases: show, list by customer, orphan report."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.commit_order import CommitOrderHandler
from storefront.application.find_orphaned_orders import FindOrphanedOrdersHandler
from storefront.application.list_customer_orders import ListCustomerOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.customer import Customer
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCustomerRepository, FakeOrderRepository


def _setup():
    order_repo = FakeOrderRepository()
    customer_repo = FakeCustomerRepository([
        Customer(id="c1", name="Alice", email="alice@example.com"),
        Customer(id="c2", name="Bob", email="bob@example.com"),
    ])
    return CommitOrderHandler(order_repo, customer_repo), order_repo, customer_repo


def _commit(handler: CommitOrderHandler, customer_id: str = "c1", qty: int = 2):
    cart = Cart()
    cart.add(Product(id="1", name="Widget", price=Money.of("10.00")), qty)
    return handler.handle(customer_id, cart.snapshot(), "1 Main St")


class TestShowOrder:

    def test_joins_all_records(self):
        commit, order_repo, customer_repo = _setup()
        result = _commit(commit)

        dto = ShowOrderHandler(order_repo, customer_repo).handle(result.order_id)
        assert dto.id == result.order_id
        assert dto.customer_name == "Alice"
        assert dto.status == "pending"
        assert dto.total == "$20.00"
        assert dto.payment_status == "pending"
        assert dto.shipment_status == "processing"
        assert dto.tracking_number.startswith("TRK-")
        assert dto.shipping_address == "1 Main St"
        assert [(i.product_name, i.quantity, i.unit_price, i.line_total) for i in dto.items] == [
            ("Widget", 2, "$10.00", "$20.00"),
        ]

    def test_orphan_shows_missing_records(self):
        commit, order_repo, customer_repo = _setup()
        order_repo.fail_on("payment")
        result = _commit(commit)

        dto = ShowOrderHandler(order_repo, customer_repo).handle(result.order_id)
        assert dto.payment_status is None
        assert dto.shipment_status is None
        assert len(dto.items) == 1

    def test_unknown_order(self):
        _, order_repo, customer_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="#42"):
            ShowOrderHandler(order_repo, customer_repo).handle(42)


class TestListCustomerOrders:

    def test_newest_first_and_only_own_orders(self):
        commit, order_repo, customer_repo = _setup()
        first = _commit(commit, "c1")
        _commit(commit, "c2")
        second = _commit(commit, "c1")

        dtos = ListCustomerOrdersHandler(order_repo, customer_repo).handle("Alice@Example.com")
        assert [d.id for d in dtos] == [second.order_id, first.order_id]

    def test_no_orders(self):
        _, order_repo, customer_repo = _setup()
        assert ListCustomerOrdersHandler(order_repo, customer_repo).handle("bob@example.com") == []

    def test_unknown_email(self):
        _, order_repo, customer_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="No customer"):
            ListCustomerOrdersHandler(order_repo, customer_repo).handle("eve@example.com")


class TestFindOrphanedOrders:

    def test_complete_orders_are_not_reported(self):
        commit, order_repo, _ = _setup()
        _commit(commit)
        assert FindOrphanedOrdersHandler(order_repo).handle() == []

    @pytest.mark.parametrize(
        "step, missing",
        [
            ("lines", ("lines", "payment", "shipment")),
            ("payment", ("payment", "shipment")),
            ("shipment", ("shipment",)),
        ],
    )
    def test_reports_missing_records(self, step, missing):
        commit, order_repo, _ = _setup()
        order_repo.fail_on(step)
        result = _commit(commit)

        report = FindOrphanedOrdersHandler(order_repo).handle()
        assert [(r.order_id, r.missing) for r in report] == [(result.order_id, missing)]
        assert report[0].total == "$20.00"

    def test_grace_period_skips_recent_orders(self):
        commit, order_repo, _ = _setup()
        order_repo.fail_on("shipment")
        _commit(commit)

        handler = FindOrphanedOrdersHandler(order_repo)
        assert handler.handle(grace=timedelta(minutes=10)) == []

        later = datetime.now(timezone.utc) + timedelta(minutes=11)
        assert len(handler.handle(grace=timedelta(minutes=10), now=later)) == 1

    def test_oldest_first(self):
        commit, order_repo, _ = _setup()
        order_repo.fail_on("payment")
        a = _commit(commit)
        b = _commit(commit)
        order_repo.get_by_id(a.order_id).created_at -= timedelta(hours=1)

        report = FindOrphanedOrdersHandler(order_repo).handle()
        assert [r.order_id for r in report] == [a.order_id, b.order_id]
