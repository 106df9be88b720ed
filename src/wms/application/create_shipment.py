"""Application service: Create Shipment use case."""

from __future__ import annotations

from wms.application.dto import ShipmentDTO, shipment_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.shipment import Shipment
from wms.domain.repository.unit_of_work import UnitOfWork


class CreateShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, request_id: str, warehouse_id: str, store_id: str) -> ShipmentDTO:
        with self._uow:
            if self._uow.locations.get_warehouse(warehouse_id) is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")
            if self._uow.locations.get_store(store_id) is None:
                raise EntityNotFoundError(f"Store '{store_id}' not found")

            shipment = Shipment.create(request_id, warehouse_id, store_id)
            self._uow.shipments.save(shipment)
            self._uow.commit()
        return shipment_dto(shipment)
