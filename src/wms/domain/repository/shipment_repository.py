"""Abstract repository for Shipment aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.shipment import Shipment


class ShipmentRepository(ABC):

    @abstractmethod
    def get_by_id(self, shipment_id: str) -> Shipment | None:
        """Return a shipment by its ID, or None."""

    @abstractmethod
    def get_by_item_id(self, item_id: str) -> Shipment | None:
        """Return the shipment owning a shipment item, or None."""

    @abstractmethod
    def list_all(self) -> list[Shipment]:
        """Return every shipment."""

    @abstractmethod
    def save(self, shipment: Shipment) -> None:
        """Persist a new or updated shipment."""
