"""Tests for the ReviewOrder use case."""

import pytest

from storefront.application.review_order import ReviewOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository


def _setup() -> tuple[ReviewOrderHandler, FakeOrderRepository, int]:
    repo = FakeOrderRepository()
    order_id = repo.add_order(Order.place("c1", Money.of("25.00")))
    return ReviewOrderHandler(repo), repo, order_id


class TestReviewOrder:

    def test_approve(self):
        handler, repo, order_id = _setup()
        assert handler.handle(order_id, approve=True) == OrderStatus.APPROVED
        assert repo.get_by_id(order_id).status == OrderStatus.APPROVED

    def test_reject(self):
        handler, repo, order_id = _setup()
        assert handler.handle(order_id, approve=False) == OrderStatus.REJECTED
        assert repo.get_by_id(order_id).status == OrderStatus.REJECTED

    def test_already_reviewed(self):
        handler, _, order_id = _setup()
        handler.handle(order_id, approve=True)
        with pytest.raises(ValidationError, match="expected pending"):
            handler.handle(order_id, approve=False)

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(999, approve=True)
