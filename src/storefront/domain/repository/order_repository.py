"""Abstract repository for orders and their dependent records.

This is the boundary to the remote data store. Each ``add_*`` method is a
single remote write: it returns only once the store has acknowledged it,
and raises ``StoreError`` if the write was not acknowledged. The store
offers no transaction spanning several of these writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.payment import Payment
from storefront.domain.model.shipment import Shipment


class OrderRepository(ABC):

    # --- Writes ---------------------------------------------------------------

    @abstractmethod
    def add_order(self, order: Order) -> int:
        """Insert an order; the store assigns, sets and returns ``order.id``."""

    @abstractmethod
    def add_lines(self, lines: list[OrderLine]) -> None:
        """Insert all lines of one order in a single write."""

    @abstractmethod
    def add_payment(self, payment: Payment) -> None:
        """Insert the payment record of an order."""

    @abstractmethod
    def add_shipment(self, shipment: Shipment) -> None:
        """Insert the shipment record of an order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Update an existing order header (status changes)."""

    # --- Reads ----------------------------------------------------------------

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_idempotency_key(self, key: str) -> Order | None:
        """Return the order committed under ``key``, or None."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Order]:
        """Return every order placed by a customer."""

    @abstractmethod
    def lines_for(self, order_id: int) -> list[OrderLine]:
        """Return the lines of an order (empty if none were written)."""

    @abstractmethod
    def payment_for(self, order_id: int) -> Payment | None:
        """Return the payment of an order, or None."""

    @abstractmethod
    def shipment_for(self, order_id: int) -> Shipment | None:
        """Return the shipment of an order, or None."""
