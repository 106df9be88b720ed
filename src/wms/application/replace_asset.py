"""Application service: Replace Asset use case.

Swaps an installed unit for another one at the same store.  Retiring the
old unit and attaching the new serial happen in one unit of work: both
halves are applied or neither is.

The new serial may belong to an AVAILABLE unit already in the registry
(it is taken from its warehouse); otherwise a new unit is registered.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ConflictError, ValidationError
from wms.domain.model.asset import Asset, AssetCondition
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink


@dataclass(frozen=True)
class ReplacementResult:
    retired: Asset
    installed: Asset


class ReplaceAssetHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(
        self,
        asset_id: str,
        new_serial_number: str,
        old_condition: str,
        reason: str,
    ) -> ReplacementResult:
        if not new_serial_number or not new_serial_number.strip():
            raise ValidationError("New serial number is required")
        if not reason or not reason.strip():
            raise ValidationError("Replacement reason is required")
        condition = AssetCondition.parse(old_condition)
        new_serial_number = new_serial_number.strip()

        with self._uow:
            old = AssetLifecycleService(self._uow.assets).get(asset_id)
            store_id = old.store_id
            if store_id is None:
                raise ConflictError(f"Asset {old.serial_number} is not installed at a store")
            store = self._uow.locations.get_store(store_id)
            store_name = store.name if store else store_id

            replacement = self._uow.assets.get_by_serial_number(new_serial_number)
            if replacement is None:
                replacement = Asset.register(
                    product_id=old.product_id,
                    serial_number=new_serial_number,
                    condition=AssetCondition.NEW,
                    location_name=store_name,
                )
            elif replacement.product_id != old.product_id:
                raise ConflictError(
                    f"Asset {new_serial_number} is a different product than {old.serial_number}"
                )

            old.retire(condition, reason, replacement.serial_number)
            replacement.install_from_stock(store_id, store_name)

            self._uow.assets.save(old)
            self._uow.assets.save(replacement)
            self._uow.commit()

        self._notifications.emit(
            "asset_replaced",
            f"Asset {old.serial_number} replaced by {replacement.serial_number} at {store_name}",
            store_id=store_id,
        )
        return ReplacementResult(retired=old, installed=replacement)
