"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from wms.domain.model.asset import Asset
from wms.domain.model.delivery import Delivery
from wms.domain.model.receiving import ReceivingSession
from wms.domain.model.shipment import Shipment

_TS_FORMAT = "%Y-%m-%d %H:%M UTC"


def _ts(value: datetime | None) -> str | None:
    return value.strftime(_TS_FORMAT) if value is not None else None


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class ReceivingLineSpec:
    """Input: one invoice line (parsed or typed in by hand)."""

    name: str
    expected_quantity: int
    sku: str | None = None
    product_id: str | None = None


# --- Stock --------------------------------------------------------------------


@dataclass(frozen=True)
class StockLineDTO:
    id: str
    product_id: str
    product_name: str
    warehouse_id: str
    warehouse_name: str
    quantity: int
    reserved: int
    available: int
    min_quantity: int
    level: str


@dataclass(frozen=True)
class AvailabilityDTO:
    """Available-to-promise: fungible stock plus discrete AVAILABLE units."""

    product_id: str
    product_name: str
    stock_available: int
    assets_available: int

    @property
    def total(self) -> int:
        return self.stock_available + self.assets_available


# --- Assets -------------------------------------------------------------------


@dataclass(frozen=True)
class AssetHistoryDTO:
    action: str
    location: str | None
    timestamp: str


@dataclass(frozen=True)
class AssetDTO:
    id: str
    serial_number: str
    product_id: str
    condition: str
    process_status: str
    location: str
    notes: str | None
    history: list[AssetHistoryDTO]


def asset_dto(asset: Asset) -> AssetDTO:
    return AssetDTO(
        id=asset.id,
        serial_number=asset.serial_number,
        product_id=asset.product_id,
        condition=asset.condition.value,
        process_status=asset.process_status.value,
        location=asset.location_label,
        notes=asset.notes,
        history=[
            AssetHistoryDTO(
                action=entry.action,
                location=entry.location,
                timestamp=_ts(entry.timestamp),  # type: ignore[arg-type]
            )
            for entry in asset.history
        ],
    )


# --- Receiving ----------------------------------------------------------------


@dataclass(frozen=True)
class ScanDTO:
    id: str
    quantity: int
    is_manual: bool
    code: str | None
    timestamp: str


@dataclass(frozen=True)
class ReceivingItemDTO:
    id: str
    name: str
    sku: str | None
    product_id: str | None
    expected_quantity: int
    scanned_quantity: int
    remaining_quantity: int
    scans: list[ScanDTO]


@dataclass(frozen=True)
class ReceivingSessionDTO:
    id: str
    warehouse_id: str
    status: str
    invoice_number: str | None
    supplier: str | None
    items: list[ReceivingItemDTO]
    total_expected: int
    total_scanned: int
    progress_percent: int
    warnings: list[str]
    created_at: str
    completed_at: str | None


def receiving_session_dto(session: ReceivingSession) -> ReceivingSessionDTO:
    return ReceivingSessionDTO(
        id=session.id,
        warehouse_id=session.warehouse_id,
        status=session.status.value,
        invoice_number=session.invoice_number,
        supplier=session.supplier,
        items=[
            ReceivingItemDTO(
                id=item.id,
                name=item.name,
                sku=item.sku,
                product_id=item.product_id,
                expected_quantity=item.expected_quantity,
                scanned_quantity=item.scanned_quantity,
                remaining_quantity=item.remaining_quantity,
                scans=[
                    ScanDTO(
                        id=scan.id,
                        quantity=scan.quantity,
                        is_manual=scan.is_manual,
                        code=scan.code,
                        timestamp=_ts(scan.timestamp),  # type: ignore[arg-type]
                    )
                    # newest first, the way operators read the log
                    for scan in reversed(item.scans)
                ],
            )
            for item in session.items
        ],
        total_expected=session.total_expected,
        total_scanned=session.total_scanned,
        progress_percent=session.progress_percent,
        warnings=session.warnings(),
        created_at=_ts(session.created_at),  # type: ignore[arg-type]
        completed_at=_ts(session.completed_at),
    )


@dataclass(frozen=True)
class ScanResultDTO:
    """Outcome of one scan event.  ``matched`` is False for unknown codes."""

    matched: bool
    code: str
    message: str
    item_id: str | None = None
    item_name: str | None = None
    quantity: int = 0
    scanned_quantity: int = 0
    expected_quantity: int = 0
    scan_id: str | None = None


@dataclass(frozen=True)
class CommittedLineDTO:
    product_id: str
    quantity: int
    stock_id: str
    new_quantity: int


@dataclass(frozen=True)
class CommitResultDTO:
    session_id: str
    warehouse_id: str
    lines: list[CommittedLineDTO]
    warnings: list[str]

    @property
    def updated_count(self) -> int:
        return len(self.lines)


# --- Shipments & deliveries ---------------------------------------------------


@dataclass(frozen=True)
class ShipmentItemDTO:
    id: str
    asset_id: str
    picked: bool
    picked_at: str | None


@dataclass(frozen=True)
class ShipmentDTO:
    id: str
    request_id: str
    warehouse_id: str
    store_id: str
    status: str
    assembled_by: str | None
    items: list[ShipmentItemDTO]
    picked_count: int
    delivery_id: str | None
    created_at: str


def shipment_dto(shipment: Shipment, delivery_id: str | None = None) -> ShipmentDTO:
    return ShipmentDTO(
        id=shipment.id,
        request_id=shipment.request_id,
        warehouse_id=shipment.warehouse_id,
        store_id=shipment.store_id,
        status=shipment.status.value,
        assembled_by=shipment.assembled_by,
        items=[
            ShipmentItemDTO(
                id=item.id,
                asset_id=item.asset_id,
                picked=item.picked,
                picked_at=_ts(item.picked_at),
            )
            for item in shipment.items
        ],
        picked_count=shipment.picked_count,
        delivery_id=delivery_id,
        created_at=_ts(shipment.created_at),  # type: ignore[arg-type]
    )


@dataclass(frozen=True)
class DeliveryEventDTO:
    title: str
    description: str | None
    timestamp: str


@dataclass(frozen=True)
class DeliveryDTO:
    id: str
    shipment_id: str
    store_id: str
    provider: str
    status: str
    courier_name: str | None
    courier_phone: str | None
    events: list[DeliveryEventDTO]
    created_at: str
    delivered_at: str | None


def delivery_dto(delivery: Delivery) -> DeliveryDTO:
    return DeliveryDTO(
        id=delivery.id,
        shipment_id=delivery.shipment_id,
        store_id=delivery.store_id,
        provider=delivery.provider,
        status=delivery.status.value,
        courier_name=delivery.courier_name,
        courier_phone=delivery.courier_phone,
        events=[
            DeliveryEventDTO(
                title=event.title,
                description=event.description,
                timestamp=_ts(event.timestamp),  # type: ignore[arg-type]
            )
            for event in delivery.events
        ],
        created_at=_ts(delivery.created_at),  # type: ignore[arg-type]
        delivered_at=_ts(delivery.delivered_at),
    )
