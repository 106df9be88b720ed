"""Unit of work over the single JSON document.

``_begin()`` takes the document lock (shared with other processes through
a sidecar lock file) and loads a private copy; the repositories mutate
that copy in place.  ``_commit()`` writes it back in one atomic
replacement, and rollback simply drops it.
"""

from __future__ import annotations

from pathlib import Path

from wms.domain.repository.unit_of_work import UnitOfWork
from wms.infrastructure.persistence.json_asset_repository import JsonAssetRepository
from wms.infrastructure.persistence.json_delivery_repository import JsonDeliveryRepository
from wms.infrastructure.persistence.json_location_repository import JsonLocationRepository
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from wms.infrastructure.persistence.json_receiving_repository import (
    JsonReceivingSessionRepository,
)
from wms.infrastructure.persistence.json_shipment_repository import JsonShipmentRepository
from wms.infrastructure.persistence.json_stock_repository import JsonStockRepository
from wms.infrastructure.persistence.json_store import JsonDocumentStore


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonDocumentStore(file_path)
        self._document: dict[str, list[dict]] | None = None

    def _begin(self) -> None:
        self._store.lock.acquire()
        try:
            self._load()
        except BaseException:
            self._store.lock.release()
            raise

    def _commit(self) -> None:
        if self._document is None:
            raise RuntimeError("commit() called outside of a unit of work")
        self._store.persist(self._document)

    def rollback(self) -> None:
        # Nothing reached the file; reload so the repos stop seeing the edits.
        if self._document is not None:
            self._load()

    def _end(self) -> None:
        self._document = None
        self._store.lock.release()

    def _load(self) -> None:
        document = self._store.load()
        self._document = document
        self.products = JsonProductRepository(document["products"])
        self.locations = JsonLocationRepository(document["warehouses"], document["stores"])
        self.stock = JsonStockRepository(document["stock"])
        self.assets = JsonAssetRepository(document["assets"])
        self.receiving = JsonReceivingSessionRepository(document["receiving_sessions"])
        self.shipments = JsonShipmentRepository(document["shipments"])
        self.deliveries = JsonDeliveryRepository(document["deliveries"])
