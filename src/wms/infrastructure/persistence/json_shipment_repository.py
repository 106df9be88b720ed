"""JSON-document-backed implementation of ShipmentRepository."""

from __future__ import annotations

from wms.domain.model.shipment import Shipment, ShipmentItem, ShipmentStatus
from wms.domain.repository.shipment_repository import ShipmentRepository
from wms.infrastructure.persistence.json_store import dump_dt, load_dt


class JsonShipmentRepository(ShipmentRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- ShipmentRepository interface -----------------------------------------

    def get_by_id(self, shipment_id: str) -> Shipment | None:
        for raw in self._records:
            if raw["id"] == shipment_id:
                return self._to_domain(raw)
        return None

    def get_by_item_id(self, item_id: str) -> Shipment | None:
        for raw in self._records:
            if any(item["id"] == item_id for item in raw.get("items", [])):
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Shipment]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, shipment: Shipment) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == shipment.id:
                self._records[i] = self._to_raw(shipment)
                return
        self._records.append(self._to_raw(shipment))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(shipment: Shipment) -> dict:
        return {
            "id": shipment.id,
            "request_id": shipment.request_id,
            "warehouse_id": shipment.warehouse_id,
            "store_id": shipment.store_id,
            "status": shipment.status.value,
            "assembled_by": shipment.assembled_by,
            "created_at": dump_dt(shipment.created_at),
            "items": [
                {
                    "id": item.id,
                    "asset_id": item.asset_id,
                    "picked": item.picked,
                    "picked_at": dump_dt(item.picked_at),
                }
                for item in shipment.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Shipment:
        return Shipment(
            id=raw["id"],
            request_id=raw["request_id"],
            warehouse_id=raw["warehouse_id"],
            store_id=raw["store_id"],
            status=ShipmentStatus(raw["status"]),
            assembled_by=raw.get("assembled_by"),
            created_at=load_dt(raw["created_at"]),
            items=[
                ShipmentItem(
                    id=item["id"],
                    asset_id=item["asset_id"],
                    picked=item.get("picked", False),
                    picked_at=load_dt(item.get("picked_at")),
                )
                for item in raw.get("items", [])
            ],
        )
