"""Order and OrderLine records.

Unlike a classic aggregate, an Order does not own its lines in memory: the
order, its lines, its payment and its shipment are four separate records
written one after another by the commit pipeline. An Order's total is
frozen at commit time and never recomputed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import SnapshotLine
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    # Set downstream by the fulfillment collaborator
    SHIPPED = "shipped"
    DELIVERED = "delivered"


@dataclass
class Order:
    """Header record of a committed order.

    ``id`` is ``None`` until the store assigns one.
    """

    id: int | None
    customer_id: str
    total_amount: Money  # frozen at commit time
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    idempotency_key: str | None = None

    @staticmethod
    def place(
        customer_id: str,
        total_amount: Money,
        idempotency_key: str | None = None,
    ) -> Order:
        """Create a new pending order."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer identity is required")
        return Order(
            id=None,
            customer_id=customer_id,
            total_amount=total_amount,
            idempotency_key=idempotency_key,
        )

    # --- Seller review --------------------------------------------------------

    def approve(self) -> None:
        self._review(OrderStatus.APPROVED)

    def reject(self) -> None:
        self._review(OrderStatus.REJECTED)

    def _review(self, outcome: OrderStatus) -> None:
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot mark order #{self.id} {outcome.value} "
                f"(current status is {self.status.value}, expected pending)"
            )
        self.status = outcome


@dataclass(frozen=True)
class OrderLine:
    """One product of a committed order, price locked at commit time."""

    order_id: int
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_snapshot(order_id: int, line: SnapshotLine) -> OrderLine:
        return OrderLine(
            order_id=order_id,
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=Quantity(line.quantity),
            unit_price=line.unit_price,
        )
