"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import CommitError


@dataclass(frozen=True)
class CommitResult:
    """Outcome of an order commit: an order id or a typed CommitError.

    ``order_id`` is also set on a partial failure, naming the orphaned
    order so it can be reconciled.
    """

    order_id: int | None = None
    error: CommitError | None = None
    resumed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def partial(self) -> bool:
        return self.error is not None and self.error.partial

    @staticmethod
    def success(order_id: int, resumed: bool = False) -> CommitResult:
        return CommitResult(order_id=order_id, resumed=resumed)

    @staticmethod
    def failure(error: CommitError) -> CommitResult:
        return CommitResult(order_id=error.order_id, error=error)


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order joined with its customer, payment and shipment."""

    id: int
    customer_id: str
    customer_name: str | None
    status: str
    items: list[OrderLineDTO]
    total: str
    created_at: str
    payment_status: str | None
    shipment_status: str | None
    tracking_number: str | None
    shipping_address: str | None


@dataclass(frozen=True)
class OrphanedOrderDTO:
    """Output: an order missing one or more of its dependent records."""

    order_id: int
    customer_id: str
    total: str
    created_at: str
    missing: tuple[str, ...]  # subset of ("lines", "payment", "shipment")
