"""Application service: Update Shipment Status use case.

Moving a shipment to SHIPPED dispatches every one of its assets
(RESERVED -> IN_TRANSIT) and opens its delivery, all in one unit of work.
Cancelling an open shipment releases its reservations.  Any other
status change leaves assets alone.
"""

from __future__ import annotations

from wms.application.dto import ShipmentDTO, shipment_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.delivery import Delivery
from wms.domain.model.shipment import ShipmentStatus
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink
from wms.logging_config import get_logger

logger = get_logger("application.update_shipment_status")


class UpdateShipmentStatusHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifications: NotificationSink | None = None,
        delivery_provider: str = "internal",
    ) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()
        self._delivery_provider = delivery_provider

    def handle(
        self,
        shipment_id: str,
        status: ShipmentStatus | str,
        assembled_by: str | None = None,
    ) -> ShipmentDTO:
        new_status = status if isinstance(status, ShipmentStatus) else ShipmentStatus.parse(status)

        with self._uow:
            shipment = self._uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment '{shipment_id}' not found")

            changed = shipment.change_status(new_status, assembled_by)
            delivery = self._uow.deliveries.get_by_shipment_id(shipment.id)
            moved = 0

            if changed and new_status == ShipmentStatus.SHIPPED:
                lifecycle = AssetLifecycleService(self._uow.assets)
                moved = len(lifecycle.dispatch_shipment(shipment))
                if delivery is None:
                    delivery = Delivery.create(
                        shipment_id=shipment.id,
                        store_id=shipment.store_id,
                        provider=self._delivery_provider,
                    )
                    self._uow.deliveries.save(delivery)
            elif changed and new_status == ShipmentStatus.CANCELLED:
                lifecycle = AssetLifecycleService(self._uow.assets)
                moved = len(lifecycle.release_shipment(shipment))

            self._uow.shipments.save(shipment)
            self._uow.commit()

        if changed:
            logger.info(
                "shipment_status_changed",
                extra={"shipment_id": shipment.id, "status": new_status.value,
                       "assets": moved},
            )
            self._notifications.emit(
                "shipment_status",
                f"Shipment {shipment.id} is now {new_status.value}",
                shipment_id=shipment.id,
            )
        return shipment_dto(shipment, delivery.id if delivery else None)
