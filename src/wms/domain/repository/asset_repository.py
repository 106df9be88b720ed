"""Abstract repository for the asset registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.asset import Asset


class AssetRepository(ABC):

    @abstractmethod
    def get_by_id(self, asset_id: str) -> Asset | None:
        """Return an asset by its ID, or None."""

    @abstractmethod
    def get_by_serial_number(self, serial_number: str) -> Asset | None:
        """Return an asset by its unique serial number, or None."""

    @abstractmethod
    def find_available(self, product_id: str, warehouse_id: str | None = None) -> list[Asset]:
        """Return AVAILABLE, store-less units of a product, oldest first."""

    @abstractmethod
    def list_all(self) -> list[Asset]:
        """Return every asset."""

    @abstractmethod
    def save(self, asset: Asset) -> None:
        """Persist a new or updated asset (history included)."""
