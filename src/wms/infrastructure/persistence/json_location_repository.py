"""JSON-document-backed implementation of LocationRepository."""

from __future__ import annotations

from wms.domain.model.location import Store, Warehouse
from wms.domain.repository.location_repository import LocationRepository


class JsonLocationRepository(LocationRepository):

    def __init__(self, warehouses: list[dict], stores: list[dict]) -> None:
        self._warehouses = warehouses
        self._stores = stores

    # --- LocationRepository interface -----------------------------------------

    def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        for raw in self._warehouses:
            if raw["id"] == warehouse_id:
                return Warehouse(id=raw["id"], name=raw["name"])
        return None

    def get_store(self, store_id: str) -> Store | None:
        for raw in self._stores:
            if raw["id"] == store_id:
                return Store(id=raw["id"], name=raw["name"], address=raw.get("address"))
        return None

    def list_warehouses(self) -> list[Warehouse]:
        return [Warehouse(id=raw["id"], name=raw["name"]) for raw in self._warehouses]

    def list_stores(self) -> list[Store]:
        return [
            Store(id=raw["id"], name=raw["name"], address=raw.get("address"))
            for raw in self._stores
        ]

    def save_warehouse(self, warehouse: Warehouse) -> None:
        _upsert(self._warehouses, {"id": warehouse.id, "name": warehouse.name})

    def save_store(self, store: Store) -> None:
        _upsert(self._stores, {"id": store.id, "name": store.name, "address": store.address})


def _upsert(records: list[dict], row: dict) -> None:
    for i, raw in enumerate(records):
        if raw["id"] == row["id"]:
            records[i] = row
            return
    records.append(row)
