"""Shipment record, one per Order."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError

TRACKING_PREFIX = "TRK-"


class ShipmentStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


def generate_tracking_number() -> str:
    """Return a tracking number with 64 random bits, e.g. ``TRK-3F9A0C2B7D41E6A8``."""
    return TRACKING_PREFIX + secrets.token_hex(8).upper()


@dataclass
class Shipment:
    order_id: int
    address: str
    tracking_number: str
    status: ShipmentStatus = ShipmentStatus.PROCESSING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    @staticmethod
    def dispatch_to(order_id: int, address: str) -> Shipment:
        """New shipment for ``order_id`` with a freshly generated tracking number."""
        if not address or not address.strip():
            raise ValidationError("Shipping address is required")
        return Shipment(
            order_id=order_id,
            address=address.strip(),
            tracking_number=generate_tracking_number(),
        )
