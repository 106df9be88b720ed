"""JSON-document-backed implementation of DeliveryRepository."""

from __future__ import annotations

from wms.domain.model.delivery import Delivery, DeliveryEvent, DeliveryStatus
from wms.domain.repository.delivery_repository import DeliveryRepository
from wms.infrastructure.persistence.json_store import dump_dt, load_dt


class JsonDeliveryRepository(DeliveryRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- DeliveryRepository interface -----------------------------------------

    def get_by_id(self, delivery_id: str) -> Delivery | None:
        for raw in self._records:
            if raw["id"] == delivery_id:
                return self._to_domain(raw)
        return None

    def get_by_shipment_id(self, shipment_id: str) -> Delivery | None:
        for raw in self._records:
            if raw["shipment_id"] == shipment_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Delivery]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, delivery: Delivery) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == delivery.id:
                self._records[i] = self._to_raw(delivery)
                return
        self._records.append(self._to_raw(delivery))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(delivery: Delivery) -> dict:
        return {
            "id": delivery.id,
            "shipment_id": delivery.shipment_id,
            "store_id": delivery.store_id,
            "provider": delivery.provider,
            "status": delivery.status.value,
            "courier_name": delivery.courier_name,
            "courier_phone": delivery.courier_phone,
            "external_id": delivery.external_id,
            "created_at": dump_dt(delivery.created_at),
            "delivered_at": dump_dt(delivery.delivered_at),
            "events": [
                {
                    "title": event.title,
                    "description": event.description,
                    "timestamp": dump_dt(event.timestamp),
                }
                for event in delivery.events
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Delivery:
        return Delivery(
            id=raw["id"],
            shipment_id=raw["shipment_id"],
            store_id=raw["store_id"],
            provider=raw["provider"],
            status=DeliveryStatus(raw["status"]),
            courier_name=raw.get("courier_name"),
            courier_phone=raw.get("courier_phone"),
            external_id=raw.get("external_id"),
            created_at=load_dt(raw["created_at"]),
            delivered_at=load_dt(raw.get("delivered_at")),
            events=[
                DeliveryEvent(
                    title=e["title"],
                    description=e.get("description"),
                    timestamp=load_dt(e["timestamp"]),
                )
                for e in raw.get("events", [])
            ],
        )
