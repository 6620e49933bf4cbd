"""Application service: Show Order use case (query).

Joins the order header with its customer, lines, payment and shipment,
the same summary a customer sees on the confirmation page.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderLineDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository


def build_order_dto(
    order: Order,
    order_repo: OrderRepository,
    customer_repo: CustomerRepository,
) -> OrderDTO:
    order_id: int = order.id  # type: ignore[assignment]
    customer = customer_repo.get_by_id(order.customer_id)
    payment = order_repo.payment_for(order_id)
    shipment = order_repo.shipment_for(order_id)

    return OrderDTO(
        id=order_id,
        customer_id=order.customer_id,
        customer_name=customer.name if customer else None,
        status=order.status.value,
        items=[
            OrderLineDTO(
                product_name=line.product_name,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order_repo.lines_for(order_id)
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        payment_status=payment.status.value if payment else None,
        shipment_status=shipment.status.value if shipment else None,
        tracking_number=shipment.tracking_number if shipment else None,
        shipping_address=shipment.address if shipment else None,
    )


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return build_order_dto(order, self._order_repo, self._customer_repo)
