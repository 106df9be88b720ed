"""Application service: Add Shipment Item use case.

Adding an asset to a shipment reserves it.  Assets that are not
AVAILABLE (or are assigned to a store) are rejected and no line is
created.
"""

from __future__ import annotations

from wms.application.dto import ShipmentItemDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService


class AddShipmentItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: str, asset_id: str) -> ShipmentItemDTO:
        with self._uow:
            shipment = self._uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment '{shipment_id}' not found")

            # Reserve first: a rejected asset must not leave a line behind
            AssetLifecycleService(self._uow.assets).reserve_for_shipment(shipment, asset_id)
            item = shipment.add_item(asset_id)

            self._uow.shipments.save(shipment)
            self._uow.commit()

        return ShipmentItemDTO(id=item.id, asset_id=item.asset_id, picked=False, picked_at=None)
