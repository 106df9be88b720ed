"""Abstract repository for the warehouse/store directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.location import Store, Warehouse


class LocationRepository(ABC):

    @abstractmethod
    def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        """Return a warehouse by ID, or None."""

    @abstractmethod
    def get_store(self, store_id: str) -> Store | None:
        """Return a store by ID, or None."""

    @abstractmethod
    def list_warehouses(self) -> list[Warehouse]:
        """Return every warehouse."""

    @abstractmethod
    def list_stores(self) -> list[Store]:
        """Return every store."""

    @abstractmethod
    def save_warehouse(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""

    @abstractmethod
    def save_store(self, store: Store) -> None:
        """Persist a new or updated store."""
