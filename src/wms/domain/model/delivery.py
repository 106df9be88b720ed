"""Delivery aggregate — the carrier leg that follows a shipped shipment.

Exactly one delivery exists per shipment.  Its status is driven by the
carrier; reaching DELIVERED is what finalizes the shipment's assets at the
destination store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ConflictError, ValidationError
from wms.domain.model.value_objects import new_id


class DeliveryStatus(Enum):
    CREATED = "CREATED"
    COURIER_ASSIGNED = "COURIER_ASSIGNED"
    PICKED_UP = "PICKED_UP"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    PROBLEM = "PROBLEM"
    CANCELLED = "CANCELLED"

    @staticmethod
    def parse(raw: str) -> DeliveryStatus:
        try:
            return DeliveryStatus(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown delivery status: {raw!r}") from exc

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    DeliveryStatus.CREATED: "Delivery order created",
    DeliveryStatus.COURIER_ASSIGNED: "Courier assigned",
    DeliveryStatus.PICKED_UP: "Picked up from warehouse",
    DeliveryStatus.IN_TRANSIT: "In transit",
    DeliveryStatus.DELIVERED: "Delivered",
    DeliveryStatus.PROBLEM: "Delivery problem",
    DeliveryStatus.CANCELLED: "Cancelled",
}

_PROGRESSION = [
    DeliveryStatus.CREATED,
    DeliveryStatus.COURIER_ASSIGNED,
    DeliveryStatus.PICKED_UP,
    DeliveryStatus.IN_TRANSIT,
    DeliveryStatus.DELIVERED,
]
_TERMINAL = (DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED)


@dataclass(frozen=True)
class DeliveryEvent:
    title: str
    description: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Delivery:
    """Aggregate root for a carrier delivery."""

    id: str
    shipment_id: str
    store_id: str
    provider: str
    status: DeliveryStatus = DeliveryStatus.CREATED
    courier_name: str | None = None
    courier_phone: str | None = None
    external_id: str | None = None
    events: list[DeliveryEvent] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    delivered_at: datetime | None = None

    @staticmethod
    def create(
        shipment_id: str,
        store_id: str,
        provider: str,
        external_id: str | None = None,
    ) -> Delivery:
        if not provider or not provider.strip():
            raise ValidationError("Delivery provider is required")
        delivery = Delivery(
            id=new_id("DLV"),
            shipment_id=shipment_id,
            store_id=store_id,
            provider=provider.strip(),
            external_id=external_id,
        )
        delivery.events.append(DeliveryEvent(title=DeliveryStatus.CREATED.label))
        return delivery

    def change_status(
        self,
        new_status: DeliveryStatus,
        courier_name: str | None = None,
        courier_phone: str | None = None,
        description: str | None = None,
    ) -> bool:
        """Apply a carrier status update; returns False when already there."""
        if new_status == self.status:
            return False
        self._check_transition(new_status)
        if new_status == DeliveryStatus.COURIER_ASSIGNED and not (
            courier_name or self.courier_name
        ):
            raise ValidationError("Courier name is required to assign a courier")
        if courier_name:
            self.courier_name = courier_name
        if courier_phone:
            self.courier_phone = courier_phone
        self.status = new_status
        if new_status == DeliveryStatus.DELIVERED:
            self.delivered_at = datetime.now(timezone.utc)
        self.events.append(DeliveryEvent(title=new_status.label, description=description))
        return True

    @property
    def is_terminal(self) -> bool:
        return self.status in _TERMINAL

    def _check_transition(self, new_status: DeliveryStatus) -> None:
        if self.is_terminal:
            raise ConflictError(
                f"Delivery {self.id} is {self.status.value} and can no longer change"
            )
        if new_status in (DeliveryStatus.PROBLEM, DeliveryStatus.CANCELLED):
            return
        if new_status == DeliveryStatus.CREATED:
            raise ConflictError(f"Delivery {self.id} cannot return to CREATED")
        if self.status == DeliveryStatus.PROBLEM:
            return
        if _PROGRESSION.index(new_status) < _PROGRESSION.index(self.status):
            raise ConflictError(
                f"Cannot move delivery {self.id} back from "
                f"{self.status.value} to {new_status.value}"
            )
