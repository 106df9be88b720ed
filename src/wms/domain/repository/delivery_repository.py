"""Abstract repository for Delivery aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.delivery import Delivery


class DeliveryRepository(ABC):

    @abstractmethod
    def get_by_id(self, delivery_id: str) -> Delivery | None:
        """Return a delivery by its ID, or None."""

    @abstractmethod
    def get_by_shipment_id(self, shipment_id: str) -> Delivery | None:
        """Return the delivery of a shipment, or None."""

    @abstractmethod
    def list_all(self) -> list[Delivery]:
        """Return every delivery."""

    @abstractmethod
    def save(self, delivery: Delivery) -> None:
        """Persist a new or updated delivery."""
