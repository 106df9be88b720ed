"""Application service: Update Delivery Status use case.

Carrier status updates land here.  Reaching DELIVERED installs every
asset of the shipment at the destination store and closes the shipment,
in the same unit of work as the status change.
"""

from __future__ import annotations

from wms.application.dto import DeliveryDTO, delivery_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.delivery import DeliveryStatus
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink
from wms.logging_config import get_logger

logger = get_logger("application.update_delivery_status")


class UpdateDeliveryStatusHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(
        self,
        delivery_id: str,
        status: DeliveryStatus | str,
        courier_name: str | None = None,
        courier_phone: str | None = None,
        description: str | None = None,
    ) -> DeliveryDTO:
        new_status = status if isinstance(status, DeliveryStatus) else DeliveryStatus.parse(status)
        store_name = None

        with self._uow:
            delivery = self._uow.deliveries.get_by_id(delivery_id)
            if delivery is None:
                raise EntityNotFoundError(f"Delivery '{delivery_id}' not found")

            changed = delivery.change_status(new_status, courier_name, courier_phone, description)

            if changed and new_status == DeliveryStatus.DELIVERED:
                shipment = self._uow.shipments.get_by_id(delivery.shipment_id)
                if shipment is None:
                    raise EntityNotFoundError(f"Shipment '{delivery.shipment_id}' not found")
                store = self._uow.locations.get_store(delivery.store_id)
                store_name = store.name if store else delivery.store_id

                lifecycle = AssetLifecycleService(self._uow.assets)
                installed = lifecycle.finalize_delivery(shipment, delivery.store_id, store_name)
                shipment.mark_delivered()
                self._uow.shipments.save(shipment)
                logger.info(
                    "delivery_completed",
                    extra={"delivery_id": delivery.id, "shipment_id": shipment.id,
                           "assets": len(installed)},
                )

            self._uow.deliveries.save(delivery)
            self._uow.commit()

        if changed:
            message = (
                f"Delivery {delivery.id}: installed at store {store_name}"
                if new_status == DeliveryStatus.DELIVERED
                else f"Delivery {delivery.id}: {new_status.label}"
            )
            self._notifications.emit(
                "delivery_status",
                message,
                delivery_id=delivery.id,
                status=new_status.value,
            )
        return delivery_dto(delivery)
