"""Application service: Uninstall Asset use case.

Removing equipment from a store is always an explicit operator decision,
so the caller has to pass ``confirmed=True``.
"""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.model.asset import Asset
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink


class UninstallAssetHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(
        self,
        asset_id: str,
        confirmed: bool,
        warehouse_id: str | None = None,
        note: str | None = None,
    ) -> Asset:
        if not confirmed:
            raise ValidationError("Uninstalling equipment must be confirmed")

        with self._uow:
            if warehouse_id is not None and self._uow.locations.get_warehouse(warehouse_id) is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")
            asset = AssetLifecycleService(self._uow.assets).get(asset_id)
            store_id = asset.store_id
            asset.uninstall(warehouse_id=warehouse_id, note=note)
            self._uow.assets.save(asset)
            self._uow.commit()

        self._notifications.emit(
            "asset_uninstalled",
            f"Asset {asset.serial_number} uninstalled from store {store_id}",
            asset_id=asset.id,
            store_id=store_id,
        )
        return asset
