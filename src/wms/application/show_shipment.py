"""Application service: Show Shipment use case (query)."""

from __future__ import annotations

from wms.application.dto import ShipmentDTO, shipment_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: str) -> ShipmentDTO:
        with self._uow:
            shipment = self._uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment '{shipment_id}' not found")
            delivery = self._uow.deliveries.get_by_shipment_id(shipment_id)
            return shipment_dto(shipment, delivery.id if delivery else None)
