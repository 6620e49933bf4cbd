"""Unit tests for shipments and tracking numbers."""

import re

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.shipment import (
    Shipment,
    ShipmentStatus,
    generate_tracking_number,
)


class TestTrackingNumber:

    def test_format(self):
        assert re.fullmatch(r"TRK-[0-9A-F]{16}", generate_tracking_number())

    def test_unique_across_many_calls(self):
        numbers = {generate_tracking_number() for _ in range(1000)}
        assert len(numbers) == 1000


class TestShipmentDispatch:

    def test_new_shipment_is_processing(self):
        s = Shipment.dispatch_to(3, "  1 Main St  ")
        assert s.order_id == 3
        assert s.address == "1 Main St"
        assert s.status == ShipmentStatus.PROCESSING
        assert s.tracking_number.startswith("TRK-")

    def test_address_required(self):
        with pytest.raises(ValidationError, match="address is required"):
            Shipment.dispatch_to(3, " ")
