"""JSON-document-backed implementation of ReceivingSessionRepository.

Items and scans are nested inside the session record, so deleting a
session removes its lines and scan logs with it.
"""

from __future__ import annotations

from wms.domain.model.receiving import ReceivingItem, ReceivingSession, ReceivingStatus, Scan
from wms.domain.repository.receiving_repository import ReceivingSessionRepository
from wms.infrastructure.persistence.json_store import dump_dt, load_dt


class JsonReceivingSessionRepository(ReceivingSessionRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- ReceivingSessionRepository interface ---------------------------------

    def get_by_id(self, session_id: str) -> ReceivingSession | None:
        for raw in self._records:
            if raw["id"] == session_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[ReceivingSession]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, session: ReceivingSession) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == session.id:
                self._records[i] = self._to_raw(session)
                return
        self._records.append(self._to_raw(session))

    def delete(self, session_id: str) -> None:
        self._records[:] = [raw for raw in self._records if raw["id"] != session_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(session: ReceivingSession) -> dict:
        return {
            "id": session.id,
            "warehouse_id": session.warehouse_id,
            "status": session.status.value,
            "invoice_number": session.invoice_number,
            "supplier": session.supplier,
            "created_at": dump_dt(session.created_at),
            "completed_at": dump_dt(session.completed_at),
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "sku": item.sku,
                    "expected_quantity": item.expected_quantity,
                    "product_id": item.product_id,
                    "scans": [
                        {
                            "id": scan.id,
                            "quantity": scan.quantity,
                            "is_manual": scan.is_manual,
                            "code": scan.code,
                            "timestamp": dump_dt(scan.timestamp),
                        }
                        for scan in item.scans
                    ],
                }
                for item in session.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> ReceivingSession:
        items = [
            ReceivingItem(
                id=item["id"],
                name=item["name"],
                sku=item.get("sku"),
                expected_quantity=item["expected_quantity"],
                product_id=item.get("product_id"),
                scans=[
                    Scan(
                        id=scan["id"],
                        quantity=scan["quantity"],
                        is_manual=scan["is_manual"],
                        code=scan.get("code"),
                        timestamp=load_dt(scan["timestamp"]),
                    )
                    for scan in item.get("scans", [])
                ],
            )
            for item in raw.get("items", [])
        ]
        return ReceivingSession(
            id=raw["id"],
            warehouse_id=raw["warehouse_id"],
            items=items,
            status=ReceivingStatus(raw["status"]),
            invoice_number=raw.get("invoice_number"),
            supplier=raw.get("supplier"),
            created_at=load_dt(raw["created_at"]),
            completed_at=load_dt(raw.get("completed_at")),
        )
