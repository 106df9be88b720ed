"""Shipment aggregate — assembles assets for a request.

Asset state changes (reserve on add, dispatch on SHIPPED) are coordinated
by the application layer through the asset lifecycle service; the
shipment itself only tracks its lines and status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.value_objects import new_id


class ShipmentStatus(Enum):
    DRAFT = "DRAFT"
    PICKING = "PICKING"
    PACKED = "PACKED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @staticmethod
    def parse(raw: str) -> ShipmentStatus:
        key = raw.strip().upper()
        key = _STATUS_ALIASES.get(key, key)
        try:
            return ShipmentStatus(key)
        except ValueError as exc:
            raise ValidationError(f"Unknown shipment status: {raw!r}") from exc


_STATUS_ALIASES = {"PENDING": "DRAFT", "READY": "PACKED"}

# Forward order; a shipment only ever moves to a later stage.
_PROGRESSION = [
    ShipmentStatus.DRAFT,
    ShipmentStatus.PICKING,
    ShipmentStatus.PACKED,
    ShipmentStatus.SHIPPED,
    ShipmentStatus.DELIVERED,
]
_OPEN_STATUSES = (ShipmentStatus.DRAFT, ShipmentStatus.PICKING, ShipmentStatus.PACKED)


@dataclass
class ShipmentItem:
    id: str
    asset_id: str
    picked: bool = False
    picked_at: datetime | None = None


@dataclass
class Shipment:
    """Aggregate root for outgoing shipments."""

    id: str
    request_id: str
    warehouse_id: str
    store_id: str
    items: list[ShipmentItem] = field(default_factory=list)
    status: ShipmentStatus = ShipmentStatus.DRAFT
    assembled_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(request_id: str, warehouse_id: str, store_id: str) -> Shipment:
        if not request_id or not request_id.strip():
            raise ValidationError("Request is required")
        if not warehouse_id:
            raise ValidationError("Source warehouse is required")
        if not store_id:
            raise ValidationError("Destination store is required")
        return Shipment(
            id=new_id("SHP"),
            request_id=request_id.strip(),
            warehouse_id=warehouse_id,
            store_id=store_id,
        )

    # --- Lines ----------------------------------------------------------------

    def add_item(self, asset_id: str) -> ShipmentItem:
        """Add a line for ``asset_id``; the asset must be reserved alongside."""
        if self.status not in _OPEN_STATUSES:
            raise ConflictError(
                f"Cannot add items to shipment {self.id} in {self.status.value} status"
            )
        if any(item.asset_id == asset_id for item in self.items):
            raise ConflictError(f"Asset {asset_id} is already in shipment {self.id}")
        item = ShipmentItem(id=new_id("SHI"), asset_id=asset_id)
        self.items.append(item)
        return item

    def pick_item(self, item_id: str) -> ShipmentItem:
        """Mark a line as physically gathered.  Does not touch asset state."""
        item = self.find_item(item_id)
        if not item.picked:
            item.picked = True
            item.picked_at = datetime.now(timezone.utc)
        return item

    def find_item(self, item_id: str) -> ShipmentItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError(f"Shipment item '{item_id}' not found")

    @property
    def asset_ids(self) -> list[str]:
        return [item.asset_id for item in self.items]

    @property
    def picked_count(self) -> int:
        return sum(1 for item in self.items if item.picked)

    # --- State transitions ----------------------------------------------------

    def change_status(
        self,
        new_status: ShipmentStatus,
        assembled_by: str | None = None,
    ) -> bool:
        """Move to ``new_status``; returns False when already there.

        DELIVERED is reached only through ``mark_delivered()``.
        """
        if new_status == self.status:
            return False
        if new_status == ShipmentStatus.DELIVERED:
            raise ConflictError(
                "A shipment becomes DELIVERED only when its delivery is delivered"
            )
        self._check_transition(new_status)
        if new_status == ShipmentStatus.SHIPPED and not self.items:
            raise ConflictError(f"Shipment {self.id} has no items to ship")
        self.status = new_status
        if assembled_by:
            self.assembled_by = assembled_by
        return True

    def mark_delivered(self) -> None:
        if self.status == ShipmentStatus.DELIVERED:
            return
        if self.status != ShipmentStatus.SHIPPED:
            raise ConflictError(
                f"Shipment {self.id} cannot be delivered from {self.status.value}"
            )
        self.status = ShipmentStatus.DELIVERED

    # --- Internal helpers -----------------------------------------------------

    def _check_transition(self, new_status: ShipmentStatus) -> None:
        if self.status in (ShipmentStatus.DELIVERED, ShipmentStatus.CANCELLED):
            raise ConflictError(
                f"Shipment {self.id} is {self.status.value} and can no longer change"
            )
        if new_status == ShipmentStatus.CANCELLED:
            if self.status not in _OPEN_STATUSES:
                raise ConflictError(
                    f"Cannot cancel shipment {self.id} in {self.status.value} status"
                )
            return
        if _PROGRESSION.index(new_status) < _PROGRESSION.index(self.status):
            raise ConflictError(
                f"Cannot move shipment {self.id} back from "
                f"{self.status.value} to {new_status.value}"
            )
