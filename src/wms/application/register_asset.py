"""Application service: Register Asset use case."""

from __future__ import annotations

from wms.domain.exceptions import ConflictError, EntityNotFoundError
from wms.domain.model.asset import Asset, AssetCondition
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink


class RegisterAssetHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(
        self,
        product_id: str,
        warehouse_id: str,
        serial_number: str | None = None,
        condition: str = "NEW",
    ) -> Asset:
        """Register a unit at a warehouse.  A serial is generated if omitted."""
        parsed_condition = AssetCondition.parse(condition)

        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            warehouse = self._uow.locations.get_warehouse(warehouse_id)
            if warehouse is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")
            if serial_number and self._uow.assets.get_by_serial_number(serial_number.strip()):
                raise ConflictError(f"Serial number {serial_number.strip()} is already registered")

            asset = Asset.register(
                product_id=product_id,
                serial_number=serial_number,
                warehouse_id=warehouse.id,
                condition=parsed_condition,
                location_name=warehouse.name,
            )
            self._uow.assets.save(asset)
            self._uow.commit()

        self._notifications.emit(
            "asset_registered",
            f"Asset {asset.serial_number} registered at {warehouse.name}",
            asset_id=asset.id,
        )
        return asset
