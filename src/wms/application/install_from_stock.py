"""Application service: Install From Stock use case.

Equips a store with one unit of a stocked product.  The stock row is
decremented by one, then an AVAILABLE unit of the product at that
warehouse is installed at the store.  When no such unit exists, a
system-generated ("virtual") asset is registered in its place so the
installation still has an audit trail.
"""

from __future__ import annotations

from wms.domain.exceptions import ConflictError, EntityNotFoundError
from wms.domain.model.asset import Asset
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink
from wms.domain.service.stock_ledger_service import StockLedgerService
from wms.logging_config import get_logger

logger = get_logger("application.install_from_stock")


class InstallFromStockHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(
        self,
        store_id: str,
        stock_id: str,
        skip_inventory: bool = False,
        note: str | None = None,
    ) -> Asset:
        with self._uow:
            store = self._uow.locations.get_store(store_id)
            if store is None:
                raise EntityNotFoundError(f"Store '{store_id}' not found")

            ledger = StockLedgerService(self._uow.stock)
            stock = ledger.get(stock_id)

            if not skip_inventory:
                if stock.quantity <= 0:
                    raise ConflictError(
                        f"Not enough stock of product {stock.product_id} "
                        f"at warehouse {stock.warehouse_id}"
                    )
                ledger.adjust(stock_id, -1)

            candidates = self._uow.assets.find_available(stock.product_id, stock.warehouse_id)
            if candidates:
                asset = candidates[0]
                asset.install_from_stock(store.id, store.name)
            else:
                asset = Asset.virtual(stock.product_id, store.id, store.name)
                logger.info(
                    "virtual_asset_created",
                    extra={"asset_id": asset.id, "product_id": stock.product_id,
                           "store_id": store.id},
                )
            if note:
                asset.notes = note

            self._uow.assets.save(asset)
            self._uow.commit()

        self._notifications.emit(
            "asset_installed",
            f"Asset {asset.serial_number} installed at store {store.name}",
            asset_id=asset.id,
            store_id=store.id,
        )
        return asset
