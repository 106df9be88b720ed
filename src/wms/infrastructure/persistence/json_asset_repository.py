"""JSON-document-backed implementation of AssetRepository."""

from __future__ import annotations

from wms.domain.exceptions import ConflictError
from wms.domain.model.asset import Asset, AssetCondition, AssetHistoryEntry, AssetProcess
from wms.domain.repository.asset_repository import AssetRepository
from wms.infrastructure.persistence.json_store import dump_dt, load_dt


class JsonAssetRepository(AssetRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- AssetRepository interface --------------------------------------------

    def get_by_id(self, asset_id: str) -> Asset | None:
        for raw in self._records:
            if raw["id"] == asset_id:
                return self._to_domain(raw)
        return None

    def get_by_serial_number(self, serial_number: str) -> Asset | None:
        for raw in self._records:
            if raw["serial_number"] == serial_number:
                return self._to_domain(raw)
        return None

    def find_available(self, product_id: str, warehouse_id: str | None = None) -> list[Asset]:
        matches = [
            raw for raw in self._records
            if raw["product_id"] == product_id
            and raw["process_status"] == AssetProcess.AVAILABLE.value
            and raw.get("store_id") is None
            and (warehouse_id is None or raw.get("warehouse_id") == warehouse_id)
        ]
        matches.sort(key=lambda raw: raw["created_at"])
        return [self._to_domain(raw) for raw in matches]

    def list_all(self) -> list[Asset]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, asset: Asset) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == asset.id:
                self._records[i] = self._to_raw(asset)
                return
            if raw["serial_number"] == asset.serial_number:
                raise ConflictError(
                    f"Serial number {asset.serial_number} is already registered"
                )
        self._records.append(self._to_raw(asset))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(asset: Asset) -> dict:
        return {
            "id": asset.id,
            "serial_number": asset.serial_number,
            "product_id": asset.product_id,
            "condition": asset.condition.value,
            "process_status": asset.process_status.value,
            "warehouse_id": asset.warehouse_id,
            "store_id": asset.store_id,
            "notes": asset.notes,
            "created_at": dump_dt(asset.created_at),
            "history": [
                {
                    "action": entry.action,
                    "location": entry.location,
                    "timestamp": dump_dt(entry.timestamp),
                }
                for entry in asset.history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Asset:
        return Asset(
            id=raw["id"],
            serial_number=raw["serial_number"],
            product_id=raw["product_id"],
            condition=AssetCondition(raw["condition"]),
            process_status=AssetProcess(raw["process_status"]),
            warehouse_id=raw.get("warehouse_id"),
            store_id=raw.get("store_id"),
            notes=raw.get("notes"),
            created_at=load_dt(raw["created_at"]),
            history=[
                AssetHistoryEntry(
                    action=h["action"],
                    location=h.get("location"),
                    timestamp=load_dt(h["timestamp"]),
                )
                for h in raw.get("history", [])
            ],
        )
