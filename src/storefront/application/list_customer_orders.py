"""Application service: List Customer Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.show_order import build_order_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.customer import normalize_email
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository


class ListCustomerOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(self, email: str) -> list[OrderDTO]:
        """Every order of the customer registered under ``email``, newest first."""
        customer = self._customer_repo.get_by_email(normalize_email(email))
        if customer is None or customer.id is None:
            raise EntityNotFoundError(f"No customer registered with email '{email}'")

        orders = sorted(
            self._order_repo.list_by_customer(customer.id),
            key=lambda o: (o.created_at, o.id or 0),
            reverse=True,
        )
        return [
            build_order_dto(order, self._order_repo, self._customer_repo)
            for order in orders
        ]
