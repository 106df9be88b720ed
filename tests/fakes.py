"""In-memory fakes for testing.

The repositories implement the same abstract interfaces as the JSON
repositories but keep everything in dicts.  Objects are copied on the way
in and out, so a handler only changes state by calling ``save()``, just
as with the real storage.

``FakeUnitOfWork`` snapshots every repository when a block starts and
restores the snapshot on rollback.
"""

from __future__ import annotations

import copy

from wms.domain.exceptions import ConflictError
from wms.domain.model.asset import Asset, AssetProcess
from wms.domain.model.delivery import Delivery
from wms.domain.model.location import Store, Warehouse
from wms.domain.model.product import Product
from wms.domain.model.receiving import ReceivingSession
from wms.domain.model.shipment import Shipment
from wms.domain.model.stock import StockItem
from wms.domain.repository.asset_repository import AssetRepository
from wms.domain.repository.delivery_repository import DeliveryRepository
from wms.domain.repository.location_repository import LocationRepository
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.receiving_repository import ReceivingSessionRepository
from wms.domain.repository.shipment_repository import ShipmentRepository
from wms.domain.repository.stock_repository import StockRepository
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.notification_sink import NotificationSink


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products or []}

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        for p in self._store.values():
            if p.sku.lower() == sku.strip().lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeLocationRepository(LocationRepository):

    def __init__(
        self,
        warehouses: list[Warehouse] | None = None,
        stores: list[Store] | None = None,
    ) -> None:
        self._warehouses: dict[str, Warehouse] = {w.id: w for w in warehouses or []}
        self._stores: dict[str, Store] = {s.id: s for s in stores or []}

    def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        return self._warehouses.get(warehouse_id)

    def get_store(self, store_id: str) -> Store | None:
        return self._stores.get(store_id)

    def list_warehouses(self) -> list[Warehouse]:
        return list(self._warehouses.values())

    def list_stores(self) -> list[Store]:
        return list(self._stores.values())

    def save_warehouse(self, warehouse: Warehouse) -> None:
        self._warehouses[warehouse.id] = warehouse

    def save_store(self, store: Store) -> None:
        self._stores[store.id] = store


class FakeStockRepository(StockRepository):

    def __init__(self, items: list[StockItem] | None = None) -> None:
        self._store: dict[str, StockItem] = {}
        self.saves = 0
        for item in items or []:
            self._store[item.id] = copy.deepcopy(item)

    def get_by_id(self, stock_id: str) -> StockItem | None:
        return copy.deepcopy(self._store.get(stock_id))

    def get_by_product_and_warehouse(self, product_id: str, warehouse_id: str) -> StockItem | None:
        for item in self._store.values():
            if item.product_id == product_id and item.warehouse_id == warehouse_id:
                return copy.deepcopy(item)
        return None

    def list_all(self, warehouse_id: str | None = None) -> list[StockItem]:
        return [
            copy.deepcopy(item) for item in self._store.values()
            if warehouse_id is None or item.warehouse_id == warehouse_id
        ]

    def list_by_product(self, product_id: str) -> list[StockItem]:
        return [copy.deepcopy(i) for i in self._store.values() if i.product_id == product_id]

    def save(self, item: StockItem) -> None:
        for other in self._store.values():
            if (other.id != item.id and other.product_id == item.product_id
                    and other.warehouse_id == item.warehouse_id):
                raise ConflictError("duplicate stock row")
        self.saves += 1
        self._store[item.id] = copy.deepcopy(item)

    def delete(self, stock_id: str) -> None:
        self._store.pop(stock_id, None)


class FailingStockRepository(FakeStockRepository):
    """Raises on the Nth call to ``save()`` to simulate a storage failure."""

    def __init__(self, items: list[StockItem] | None = None, fail_on_save: int = 1) -> None:
        super().__init__(items)
        self._fail_on_save = fail_on_save
        self._calls = 0

    def save(self, item: StockItem) -> None:
        self._calls += 1
        if self._calls == self._fail_on_save:
            raise OSError("disk full")
        super().save(item)


class FakeAssetRepository(AssetRepository):

    def __init__(self, assets: list[Asset] | None = None) -> None:
        self._store: dict[str, Asset] = {}
        for asset in assets or []:
            self._store[asset.id] = copy.deepcopy(asset)

    def get_by_id(self, asset_id: str) -> Asset | None:
        return copy.deepcopy(self._store.get(asset_id))

    def get_by_serial_number(self, serial_number: str) -> Asset | None:
        for asset in self._store.values():
            if asset.serial_number == serial_number:
                return copy.deepcopy(asset)
        return None

    def find_available(self, product_id: str, warehouse_id: str | None = None) -> list[Asset]:
        matches = [
            a for a in self._store.values()
            if a.product_id == product_id
            and a.process_status == AssetProcess.AVAILABLE
            and a.store_id is None
            and (warehouse_id is None or a.warehouse_id == warehouse_id)
        ]
        matches.sort(key=lambda a: a.created_at)
        return [copy.deepcopy(a) for a in matches]

    def list_all(self) -> list[Asset]:
        return [copy.deepcopy(a) for a in self._store.values()]

    def save(self, asset: Asset) -> None:
        self._store[asset.id] = copy.deepcopy(asset)


class FakeReceivingSessionRepository(ReceivingSessionRepository):

    def __init__(self) -> None:
        self._store: dict[str, ReceivingSession] = {}

    def get_by_id(self, session_id: str) -> ReceivingSession | None:
        return copy.deepcopy(self._store.get(session_id))

    def list_all(self) -> list[ReceivingSession]:
        return [copy.deepcopy(s) for s in self._store.values()]

    def save(self, session: ReceivingSession) -> None:
        self._store[session.id] = copy.deepcopy(session)

    def delete(self, session_id: str) -> None:
        self._store.pop(session_id, None)


class FakeShipmentRepository(ShipmentRepository):

    def __init__(self) -> None:
        self._store: dict[str, Shipment] = {}

    def get_by_id(self, shipment_id: str) -> Shipment | None:
        return copy.deepcopy(self._store.get(shipment_id))

    def get_by_item_id(self, item_id: str) -> Shipment | None:
        for shipment in self._store.values():
            if any(item.id == item_id for item in shipment.items):
                return copy.deepcopy(shipment)
        return None

    def list_all(self) -> list[Shipment]:
        return [copy.deepcopy(s) for s in self._store.values()]

    def save(self, shipment: Shipment) -> None:
        self._store[shipment.id] = copy.deepcopy(shipment)


class FakeDeliveryRepository(DeliveryRepository):

    def __init__(self) -> None:
        self._store: dict[str, Delivery] = {}

    def get_by_id(self, delivery_id: str) -> Delivery | None:
        return copy.deepcopy(self._store.get(delivery_id))

    def get_by_shipment_id(self, shipment_id: str) -> Delivery | None:
        for delivery in self._store.values():
            if delivery.shipment_id == shipment_id:
                return copy.deepcopy(delivery)
        return None

    def list_all(self) -> list[Delivery]:
        return [copy.deepcopy(d) for d in self._store.values()]

    def save(self, delivery: Delivery) -> None:
        self._store[delivery.id] = copy.deepcopy(delivery)


class FakeUnitOfWork(UnitOfWork):

    def __init__(
        self,
        products: list[Product] | None = None,
        warehouses: list[Warehouse] | None = None,
        stores: list[Store] | None = None,
        stock: StockRepository | None = None,
        assets: list[Asset] | None = None,
    ) -> None:
        self.products = FakeProductRepository(products)
        self.locations = FakeLocationRepository(warehouses, stores)
        self.stock = stock if stock is not None else FakeStockRepository()
        self.assets = FakeAssetRepository(assets)
        self.receiving = FakeReceivingSessionRepository()
        self.shipments = FakeShipmentRepository()
        self.deliveries = FakeDeliveryRepository()
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: dict | None = None

    def _repos(self) -> dict:
        return {
            "products": self.products,
            "locations": self.locations,
            "stock": self.stock,
            "assets": self.assets,
            "receiving": self.receiving,
            "shipments": self.shipments,
            "deliveries": self.deliveries,
        }

    def _begin(self) -> None:
        self._snapshot = {name: copy.deepcopy(repo.__dict__) for name, repo in self._repos().items()}

    def _commit(self) -> None:
        self.commits += 1
        self._snapshot = {name: copy.deepcopy(repo.__dict__) for name, repo in self._repos().items()}

    def rollback(self) -> None:
        self.rollbacks += 1
        if self._snapshot is None:
            return
        for name, repo in self._repos().items():
            repo.__dict__.clear()
            repo.__dict__.update(copy.deepcopy(self._snapshot[name]))


class RecordingNotificationSink(NotificationSink):

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def emit(self, event: str, message: str, **context: object) -> None:
        self.events.append((event, message, context))

    @property
    def names(self) -> list[str]:
        return [event for event, _, _ in self.events]
