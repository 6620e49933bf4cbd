"""Application service: Commit Order use case.

Turns a cart snapshot into four records, written strictly in this order,
each as its own remote write:

1. Order     (status ``pending``, total frozen from the snapshot)
2. OrderLines (one per snapshot line, unit prices frozen)
3. Payment   (amount == order total, status ``pending``)
4. Shipment  (status ``processing``, fresh tracking number)

The store has no transaction spanning these writes. A failure after step 1
leaves an *orphaned order* behind; it is reported, never rolled back and
never retried here. Every outcome is returned as a ``CommitResult``.

Without an idempotency key every call creates a new Order, so retrying a
partially failed commit produces a second order. With a key, a retry finds
the order written by the earlier attempt and only writes what is missing.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CommitResult
from storefront.domain.exceptions import (
    CommitError,
    CommitValidationError,
    LineInsertionFailed,
    OrderCreationFailed,
    PaymentCreationFailed,
    ShipmentCreationFailed,
    StoreError,
)
from storefront.domain.model.cart import CartSnapshot
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.payment import Payment
from storefront.domain.model.shipment import Shipment
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CommitOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str | None,
        snapshot: CartSnapshot,
        shipping_address: str | None,
        idempotency_key: str | None = None,
    ) -> CommitResult:
        log = logger.bind(customer_id=customer_id, idempotency_key=idempotency_key)

        error = self._validate(customer_id, snapshot, shipping_address)
        if error is not None:
            log.warning("Order commit rejected", reason=str(error))
            return CommitResult.failure(error)

        address = shipping_address.strip()  # type: ignore[union-attr]

        if idempotency_key:
            try:
                existing = self._order_repo.get_by_idempotency_key(idempotency_key)
            except StoreError as exc:
                log.warning("Order commit failed", step="lookup", error=str(exc))
                return CommitResult.failure(
                    OrderCreationFailed(f"Could not look up previous attempt: {exc}")
                )
            if existing is not None:
                return self._resume(existing, customer_id, snapshot, address, log)

        # Step 1: freeze the total
        total = snapshot.subtotal

        # Step 2: order header
        order = Order.place(
            customer_id,  # type: ignore[arg-type]
            total,
            idempotency_key=idempotency_key,
        )
        try:
            order_id = self._order_repo.add_order(order)
        except StoreError as exc:
            log.warning("Order commit failed", step="order", error=str(exc))
            return CommitResult.failure(
                OrderCreationFailed(f"Could not create order: {exc}")
            )

        error = self._write_dependents(order_id, order, snapshot, address, resuming=False)
        if error is not None:
            return self._partial_failure(error, log)

        log.info(
            "Order committed",
            order_id=order_id,
            total=str(total),
            lines=len(snapshot),
        )
        return CommitResult.success(order_id)

    # --- Steps 3-5 ------------------------------------------------------------

    def _write_dependents(
        self,
        order_id: int,
        order: Order,
        snapshot: CartSnapshot,
        address: str,
        resuming: bool,
    ) -> CommitError | None:
        """Write lines, payment and shipment; stop at the first failure.

        When ``resuming``, records that already exist are left alone.
        """
        try:
            if not (resuming and self._order_repo.lines_for(order_id)):
                self._order_repo.add_lines(
                    [OrderLine.from_snapshot(order_id, line) for line in snapshot.lines]
                )
        except StoreError as exc:
            return LineInsertionFailed(
                f"Order #{order_id} was created but its lines could not be saved: {exc}",
                order_id=order_id,
            )

        try:
            if not (resuming and self._order_repo.payment_for(order_id)):
                self._order_repo.add_payment(
                    Payment(order_id=order_id, amount=order.total_amount)
                )
        except StoreError as exc:
            return PaymentCreationFailed(
                f"Order #{order_id} has no payment record: {exc}",
                order_id=order_id,
            )

        try:
            if not (resuming and self._order_repo.shipment_for(order_id)):
                self._order_repo.add_shipment(Shipment.dispatch_to(order_id, address))
        except StoreError as exc:
            return ShipmentCreationFailed(
                f"Order #{order_id} has no shipment record: {exc}",
                order_id=order_id,
            )

        return None

    def _resume(
        self,
        order: Order,
        customer_id: str,
        snapshot: CartSnapshot,
        address: str,
        log: structlog.stdlib.BoundLogger,
    ) -> CommitResult:
        if order.customer_id != customer_id:
            log.warning(
                "Order commit rejected",
                reason="idempotency key belongs to another customer",
                order_id=order.id,
            )
            return CommitResult.failure(
                CommitValidationError(
                    f"Idempotency key already used by order #{order.id} "
                    "of another customer"
                )
            )

        if order.total_amount != snapshot.subtotal:
            log.warning(
                "Order commit rejected",
                reason="idempotency key reused for a different cart",
                order_id=order.id,
            )
            return CommitResult.failure(
                CommitValidationError(
                    f"Idempotency key already used by order #{order.id} "
                    f"for a total of {order.total_amount}, not {snapshot.subtotal}"
                )
            )

        log.info("Resuming order commit", order_id=order.id)
        error = self._write_dependents(
            order.id, order, snapshot, address, resuming=True  # type: ignore[arg-type]
        )
        if error is not None:
            return self._partial_failure(error, log)

        log.info("Order committed", order_id=order.id, resumed=True)
        return CommitResult.success(order.id, resumed=True)

    # --- Helpers --------------------------------------------------------------

    def _validate(
        self,
        customer_id: str | None,
        snapshot: CartSnapshot,
        shipping_address: str | None,
    ) -> CommitError | None:
        if snapshot.is_empty:
            return CommitValidationError("Cart is empty")
        if not shipping_address or not shipping_address.strip():
            return CommitValidationError("Shipping address is required")
        if not customer_id or not customer_id.strip():
            return CommitValidationError("Customer identity is required")

        try:
            customer = self._customer_repo.get_by_id(customer_id)
        except StoreError as exc:
            return OrderCreationFailed(f"Could not verify customer: {exc}")
        if customer is None:
            return CommitValidationError(f"Customer '{customer_id}' not found")
        return None

    @staticmethod
    def _partial_failure(
        error: CommitError, log: structlog.stdlib.BoundLogger
    ) -> CommitResult:
        log.error(
            "Order commit partially failed",
            order_id=error.order_id,
            failure=type(error).__name__,
            error=str(error),
        )
        return CommitResult.failure(error)
