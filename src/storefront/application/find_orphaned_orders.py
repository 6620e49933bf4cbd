"""Application service: Find Orphaned Orders use case (query).

Lists orders that a partially failed commit left without lines, payment
or shipment. Repairing them is up to the seller's reconciliation tooling;
this report never writes anything.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from storefront.application.dto import OrphanedOrderDTO
from storefront.domain.repository.order_repository import OrderRepository


class FindOrphanedOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        grace: timedelta = timedelta(0),
        now: datetime | None = None,
    ) -> list[OrphanedOrderDTO]:
        """Orphaned orders created at least ``grace`` ago, oldest first.

        The grace period skips orders whose commit may still be in flight.
        """
        cutoff = (now or datetime.now(timezone.utc)) - grace

        report: list[OrphanedOrderDTO] = []
        for order in sorted(self._order_repo.list_all(), key=lambda o: o.created_at):
            if order.id is None or order.created_at > cutoff:
                continue

            missing: list[str] = []
            if not self._order_repo.lines_for(order.id):
                missing.append("lines")
            if self._order_repo.payment_for(order.id) is None:
                missing.append("payment")
            if self._order_repo.shipment_for(order.id) is None:
                missing.append("shipment")

            if missing:
                report.append(
                    OrphanedOrderDTO(
                        order_id=order.id,
                        customer_id=order.customer_id,
                        total=str(order.total_amount),
                        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
                        missing=tuple(missing),
                    )
                )
        return report
