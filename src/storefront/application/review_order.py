"""Application service: Review Order use case.

A seller approves or rejects a pending order. This is the only mutation
an Order header ever sees after the commit pipeline wrote it.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ReviewOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, approve: bool) -> OrderStatus:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if approve:
            order.approve()
        else:
            order.reject()
        self._order_repo.save(order)

        logger.info("Order reviewed", order_id=order_id, status=order.status.value)
        return order.status
