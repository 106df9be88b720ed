"""Application service: Pick Shipment Item use case.

Picking is bookkeeping for the assembler; asset state does not change.
"""

from __future__ import annotations

from wms.application.dto import ShipmentItemDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class PickShipmentItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, item_id: str) -> ShipmentItemDTO:
        with self._uow:
            shipment = self._uow.shipments.get_by_item_id(item_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment item '{item_id}' not found")
            item = shipment.pick_item(item_id)
            self._uow.shipments.save(shipment)
            self._uow.commit()

        return ShipmentItemDTO(
            id=item.id,
            asset_id=item.asset_id,
            picked=item.picked,
            picked_at=item.picked_at.strftime("%Y-%m-%d %H:%M UTC") if item.picked_at else None,
        )
