"""Unit tests for the Shipment aggregate."""

import pytest

from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.shipment import Shipment, ShipmentStatus


def _shipment(*asset_ids):
    shipment = Shipment.create("REQ-1", "W1", "S1")
    for asset_id in asset_ids:
        shipment.add_item(asset_id)
    return shipment


class TestShipmentItems:

    def test_create_starts_in_draft(self):
        shipment = _shipment()
        assert shipment.status == ShipmentStatus.DRAFT
        assert shipment.id.startswith("SHP-")

    def test_request_required(self):
        with pytest.raises(ValidationError, match="Request is required"):
            Shipment.create(" ", "W1", "S1")

    def test_duplicate_asset_rejected(self):
        shipment = _shipment("A1")
        with pytest.raises(ConflictError, match="already in shipment"):
            shipment.add_item("A1")

    def test_add_after_shipped_rejected(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.SHIPPED)
        with pytest.raises(ConflictError, match="Cannot add items"):
            shipment.add_item("A2")

    def test_pick_item(self):
        shipment = _shipment("A1", "A2")
        item = shipment.pick_item(shipment.items[0].id)
        assert item.picked
        assert item.picked_at is not None
        assert shipment.picked_count == 1

    def test_pick_unknown_item(self):
        with pytest.raises(EntityNotFoundError):
            _shipment("A1").pick_item("SHI-missing")


class TestShipmentStatus:

    def test_forward_skip_allowed(self):
        shipment = _shipment("A1")
        assert shipment.change_status(ShipmentStatus.PACKED, assembled_by="kim")
        assert shipment.status == ShipmentStatus.PACKED
        assert shipment.assembled_by == "kim"

    def test_backward_rejected(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.PACKED)
        with pytest.raises(ConflictError, match="back from PACKED"):
            shipment.change_status(ShipmentStatus.PICKING)

    def test_same_status_is_noop(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.PICKING)
        assert shipment.change_status(ShipmentStatus.PICKING) is False

    def test_ship_empty_rejected(self):
        with pytest.raises(ConflictError, match="no items"):
            _shipment().change_status(ShipmentStatus.SHIPPED)

    def test_delivered_only_through_delivery(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.SHIPPED)
        with pytest.raises(ConflictError, match="only when its delivery"):
            shipment.change_status(ShipmentStatus.DELIVERED)
        shipment.mark_delivered()
        assert shipment.status == ShipmentStatus.DELIVERED

    def test_mark_delivered_requires_shipped(self):
        with pytest.raises(ConflictError, match="cannot be delivered"):
            _shipment("A1").mark_delivered()

    def test_cancel_after_shipped_rejected(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.SHIPPED)
        with pytest.raises(ConflictError, match="Cannot cancel"):
            shipment.change_status(ShipmentStatus.CANCELLED)

    def test_cancelled_is_final(self):
        shipment = _shipment("A1")
        shipment.change_status(ShipmentStatus.CANCELLED)
        with pytest.raises(ConflictError, match="can no longer change"):
            shipment.change_status(ShipmentStatus.PICKING)

    def test_status_aliases(self):
        assert ShipmentStatus.parse("pending") == ShipmentStatus.DRAFT
        assert ShipmentStatus.parse("READY") == ShipmentStatus.PACKED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Unknown shipment status"):
            ShipmentStatus.parse("LOST")
