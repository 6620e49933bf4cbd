"""JSON-file-backed implementation of OrderRepository.

One file per table (``orders.json``, ``order_items.json``, ``payments.json``,
``shipments.json``). Every ``add_*`` call is one file write, mirroring the
one-request-per-insert behaviour of the hosted store; there is no
transaction across files.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.payment import Payment, PaymentStatus
from storefront.domain.model.shipment import Shipment, ShipmentStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_table import JsonTable


class JsonOrderRepository(OrderRepository):

    def __init__(self, data_dir: Path) -> None:
        self._orders = JsonTable(data_dir / "orders.json")
        self._lines = JsonTable(data_dir / "order_items.json")
        self._payments = JsonTable(data_dir / "payments.json")
        self._shipments = JsonTable(data_dir / "shipments.json")

    # --- Writes ---------------------------------------------------------------

    def add_order(self, order: Order) -> int:
        records = self._orders.read()
        order.id = max((r["id"] for r in records), default=0) + 1
        self._orders.write(records + [self._order_to_raw(order)])
        return order.id

    def add_lines(self, lines: list[OrderLine]) -> None:
        next_id = self._lines.next_id()
        self._lines.append(
            *(self._line_to_raw(line, next_id + i) for i, line in enumerate(lines))
        )

    def add_payment(self, payment: Payment) -> None:
        payment.id = self._payments.next_id()
        self._payments.append(
            {
                "id": payment.id,
                "order_id": payment.order_id,
                "amount": str(payment.amount.amount),
                "currency": payment.amount.currency,
                "payment_method": payment.method,
                "status": payment.status.value,
                "payment_date": payment.created_at.isoformat(),
            }
        )

    def add_shipment(self, shipment: Shipment) -> None:
        shipment.id = self._shipments.next_id()
        self._shipments.append(
            {
                "id": shipment.id,
                "order_id": shipment.order_id,
                "address": shipment.address,
                "tracking_number": shipment.tracking_number,
                "status": shipment.status.value,
                "shipment_date": shipment.created_at.isoformat(),
            }
        )

    def save(self, order: Order) -> None:
        records = self._orders.read()
        for i, raw in enumerate(records):
            if raw["id"] == order.id:
                records[i] = self._order_to_raw(order)
                self._orders.write(records)
                return
        raise EntityNotFoundError(f"Order #{order.id} not found")

    # --- Reads ----------------------------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        return self._find_order(lambda raw: raw["id"] == order_id)

    def get_by_idempotency_key(self, key: str) -> Order | None:
        return self._find_order(lambda raw: raw.get("idempotency_key") == key)

    def list_all(self) -> list[Order]:
        return [self._order_to_domain(raw) for raw in self._orders.read()]

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [
            self._order_to_domain(raw)
            for raw in self._orders.read()
            if raw["customer_id"] == customer_id
        ]

    def lines_for(self, order_id: int) -> list[OrderLine]:
        return [
            OrderLine(
                id=raw["id"],
                order_id=raw["order_id"],
                product_id=raw["product_id"],
                product_name=raw["product_name"],
                quantity=Quantity(raw["quantity"]),
                unit_price=Money.of(raw["price_per_unit"], raw.get("currency", "USD")),
            )
            for raw in self._lines.read()
            if raw["order_id"] == order_id
        ]

    def payment_for(self, order_id: int) -> Payment | None:
        for raw in self._payments.read():
            if raw["order_id"] == order_id:
                return Payment(
                    id=raw["id"],
                    order_id=raw["order_id"],
                    amount=Money.of(raw["amount"], raw.get("currency", "USD")),
                    method=raw["payment_method"],
                    status=PaymentStatus(raw["status"]),
                    created_at=datetime.fromisoformat(raw["payment_date"]),
                )
        return None

    def shipment_for(self, order_id: int) -> Shipment | None:
        for raw in self._shipments.read():
            if raw["order_id"] == order_id:
                return Shipment(
                    id=raw["id"],
                    order_id=raw["order_id"],
                    address=raw["address"],
                    tracking_number=raw["tracking_number"],
                    status=ShipmentStatus(raw["status"]),
                    created_at=datetime.fromisoformat(raw["shipment_date"]),
                )
        return None

    # --- Serialization --------------------------------------------------------

    def _find_order(self, predicate) -> Order | None:
        for raw in self._orders.read():
            if predicate(raw):
                return self._order_to_domain(raw)
        return None

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "status": order.status.value,
            "order_date": order.created_at.isoformat(),
            "idempotency_key": order.idempotency_key,
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            total_amount=Money.of(raw["total_amount"], raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["order_date"]),
            idempotency_key=raw.get("idempotency_key"),
        )

    @staticmethod
    def _line_to_raw(line: OrderLine, line_id: int) -> dict:
        return {
            "id": line_id,
            "order_id": line.order_id,
            "product_id": line.product_id,
            "product_name": line.product_name,
            "quantity": line.quantity.value,
            "price_per_unit": str(line.unit_price.amount),
            "currency": line.unit_price.currency,
        }
