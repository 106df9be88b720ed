"""Asset aggregate — one physical equipment unit.

An asset carries two orthogonal states: its physical ``condition`` and its
workflow ``process_status``.  Transitions validate the workflow state only;
condition is informational.  Every transition appends an entry to the
asset's history, which is never rewritten.

Workflow::

    AVAILABLE -> RESERVED -> IN_TRANSIT -> DELIVERED -> INSTALLED
        ^                                                  |
        +------------------- uninstall -------------------+
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ConflictError, ValidationError
from wms.domain.model.value_objects import new_id


class AssetCondition(Enum):
    NEW = "NEW"
    WORKING = "WORKING"
    NEEDS_REPAIR = "NEEDS_REPAIR"
    IN_REPAIR = "IN_REPAIR"
    BROKEN = "BROKEN"
    DECOMMISSIONED = "DECOMMISSIONED"

    @staticmethod
    def parse(raw: str) -> AssetCondition:
        key = raw.strip().upper()
        key = _CONDITION_ALIASES.get(key, key)
        try:
            return AssetCondition(key)
        except ValueError as exc:
            raise ValidationError(f"Unknown asset condition: {raw!r}") from exc


_CONDITION_ALIASES = {
    "GOOD": "WORKING",
    "FAIR": "NEEDS_REPAIR",
    "REPAIR": "IN_REPAIR",
}


class AssetProcess(Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    INSTALLED = "INSTALLED"


@dataclass(frozen=True)
class AssetHistoryEntry:
    action: str
    location: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Asset:
    """Aggregate root for a serialized unit.

    Location invariant (checked after every transition):

    - AVAILABLE / RESERVED: no store; at a warehouse or unassigned
    - IN_TRANSIT: neither warehouse nor store
    - DELIVERED / INSTALLED: store set, warehouse cleared
    """

    id: str
    serial_number: str
    product_id: str
    condition: AssetCondition = AssetCondition.NEW
    process_status: AssetProcess = AssetProcess.AVAILABLE
    warehouse_id: str | None = None
    store_id: str | None = None
    notes: str | None = None
    history: list[AssetHistoryEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def register(
        product_id: str,
        serial_number: str | None = None,
        warehouse_id: str | None = None,
        condition: AssetCondition = AssetCondition.NEW,
        location_name: str | None = None,
    ) -> Asset:
        """Register a unit that physically arrived at a warehouse."""
        if not product_id:
            raise ValidationError("Product is required")
        if serial_number is not None and not serial_number.strip():
            raise ValidationError("Serial number cannot be blank")
        asset = Asset(
            id=new_id("AST"),
            serial_number=(serial_number or generate_serial_number()).strip(),
            product_id=product_id,
            condition=condition,
            warehouse_id=warehouse_id,
        )
        asset._record("Registered", location_name or warehouse_id)
        return asset

    @staticmethod
    def virtual(product_id: str, store_id: str, store_name: str | None = None) -> Asset:
        """Create a placeholder for a stock unit that had no serialized record.

        Used when fungible stock is installed at a store and no AVAILABLE
        unit of the product exists at the warehouse.
        """
        asset = Asset(
            id=new_id("AST"),
            serial_number=generate_serial_number(),
            product_id=product_id,
            condition=AssetCondition.WORKING,
        )
        asset._record("Registered from stock (virtual unit)", store_name or store_id)
        asset.install_from_stock(store_id, store_name)
        return asset

    # --- Workflow transitions -------------------------------------------------

    def reserve(self, shipment_id: str) -> None:
        """AVAILABLE -> RESERVED, only for units not assigned to a store."""
        if self.process_status != AssetProcess.AVAILABLE:
            raise ConflictError(
                f"Asset {self.serial_number} cannot be reserved — status is "
                f"{self.process_status.value}, expected AVAILABLE"
            )
        if self.store_id is not None:
            raise ConflictError(
                f"Asset {self.serial_number} is assigned to store {self.store_id}"
            )
        self.process_status = AssetProcess.RESERVED
        self._record(f"Reserved for shipment {shipment_id}", self.warehouse_id)

    def release(self, shipment_id: str) -> None:
        """RESERVED -> AVAILABLE when a shipment is cancelled."""
        self._require(AssetProcess.RESERVED, "released")
        self.process_status = AssetProcess.AVAILABLE
        self._record(f"Released from shipment {shipment_id}", self.warehouse_id)

    def dispatch(self, shipment_id: str) -> None:
        """RESERVED -> IN_TRANSIT; the unit leaves its warehouse."""
        self._require(AssetProcess.RESERVED, "dispatched")
        origin = self.warehouse_id
        self.process_status = AssetProcess.IN_TRANSIT
        self.warehouse_id = None
        self._record(f"Shipped with shipment {shipment_id} from {origin or 'unknown'}")

    def deliver(self, store_id: str, store_name: str | None = None) -> None:
        """IN_TRANSIT -> DELIVERED at the destination store."""
        self._require(AssetProcess.IN_TRANSIT, "delivered")
        self.process_status = AssetProcess.DELIVERED
        self.store_id = store_id
        self.warehouse_id = None
        self._record("Delivered to store", store_name or store_id)

    def install(self, store_name: str | None = None) -> None:
        """DELIVERED -> INSTALLED at the store it was delivered to."""
        self._require(AssetProcess.DELIVERED, "installed")
        self.process_status = AssetProcess.INSTALLED
        self._record("Installed", store_name or self.store_id)

    def install_from_stock(self, store_id: str, store_name: str | None = None) -> None:
        """AVAILABLE -> INSTALLED when a store is equipped directly from stock."""
        self._require(AssetProcess.AVAILABLE, "installed from stock")
        if self.store_id is not None:
            raise ConflictError(
                f"Asset {self.serial_number} is assigned to store {self.store_id}"
            )
        self.process_status = AssetProcess.INSTALLED
        self.store_id = store_id
        self.warehouse_id = None
        self._record("Installed while equipping store", store_name or store_id)

    def uninstall(self, warehouse_id: str | None = None, note: str | None = None) -> None:
        """INSTALLED -> AVAILABLE; the unit returns to a warehouse pool."""
        self._require(AssetProcess.INSTALLED, "uninstalled")
        origin = self.store_id
        self.process_status = AssetProcess.AVAILABLE
        self.store_id = None
        self.warehouse_id = warehouse_id
        if note:
            self.notes = note
        self._record(f"Uninstalled from store {origin}", warehouse_id)

    def retire(self, condition: AssetCondition, reason: str, replacement_serial: str) -> None:
        """Take an installed unit out of service as part of a replacement."""
        if not reason or not reason.strip():
            raise ValidationError("Replacement reason is required")
        self._require(AssetProcess.INSTALLED, "replaced")
        origin = self.store_id
        self.condition = condition
        self.process_status = AssetProcess.AVAILABLE
        self.store_id = None
        self.notes = f"Replaced by SN {replacement_serial}. Reason: {reason.strip()}"
        self._record(
            f"Replaced at store {origin} by SN {replacement_serial} "
            f"({condition.value}): {reason.strip()}"
        )

    def change_condition(self, condition: AssetCondition, note: str | None = None) -> None:
        if condition == self.condition:
            return
        previous = self.condition
        self.condition = condition
        if note:
            self.notes = note
        self._record(f"Condition changed {previous.value} -> {condition.value}")

    # --- Computed properties --------------------------------------------------

    @property
    def location_consistent(self) -> bool:
        status = self.process_status
        if status in (AssetProcess.DELIVERED, AssetProcess.INSTALLED):
            return self.store_id is not None and self.warehouse_id is None
        if status == AssetProcess.IN_TRANSIT:
            return self.store_id is None and self.warehouse_id is None
        return self.store_id is None

    @property
    def location_label(self) -> str:
        if self.store_id:
            return f"store:{self.store_id}"
        if self.warehouse_id:
            return f"warehouse:{self.warehouse_id}"
        if self.process_status == AssetProcess.IN_TRANSIT:
            return "in transit"
        return "unassigned"

    # --- Internal helpers -----------------------------------------------------

    def _require(self, expected: AssetProcess, verb: str) -> None:
        if self.process_status != expected:
            raise ConflictError(
                f"Asset {self.serial_number} cannot be {verb} — status is "
                f"{self.process_status.value}, expected {expected.value}"
            )

    def _record(self, action: str, location: str | None = None) -> None:
        if not self.location_consistent:
            raise ConflictError(
                f"Asset {self.serial_number} location inconsistent with "
                f"{self.process_status.value}"
            )
        self.history.append(AssetHistoryEntry(action=action, location=location))


def generate_serial_number() -> str:
    """System serial for units whose real serial number is unknown."""
    return new_id("SN").upper()
