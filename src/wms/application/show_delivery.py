"""Application service: Show Delivery use case (query)."""

from __future__ import annotations

from wms.application.dto import DeliveryDTO, delivery_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowDeliveryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, delivery_id: str) -> DeliveryDTO:
        with self._uow:
            delivery = self._uow.deliveries.get_by_id(delivery_id)
            if delivery is None:
                delivery = self._uow.deliveries.get_by_shipment_id(delivery_id)
            if delivery is None:
                raise EntityNotFoundError(f"Delivery '{delivery_id}' not found")
            return delivery_dto(delivery)
