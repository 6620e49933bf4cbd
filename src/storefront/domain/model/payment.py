"""Payment record, one per Order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.model.value_objects import Money

DEFAULT_PAYMENT_METHOD = "Credit Card"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Payment:
    order_id: int
    amount: Money  # always the order's frozen total
    method: str = DEFAULT_PAYMENT_METHOD
    status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None
