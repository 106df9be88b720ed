"""Abstract repository for the stock ledger.

Implementations must keep (product_id, warehouse_id) unique.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.stock import StockItem


class StockRepository(ABC):

    @abstractmethod
    def get_by_id(self, stock_id: str) -> StockItem | None:
        """Return a ledger row by its ID, or None."""

    @abstractmethod
    def get_by_product_and_warehouse(
        self, product_id: str, warehouse_id: str
    ) -> StockItem | None:
        """Return the row for a (product, warehouse) pair, or None."""

    @abstractmethod
    def list_all(self, warehouse_id: str | None = None) -> list[StockItem]:
        """Return every row, optionally restricted to one warehouse."""

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[StockItem]:
        """Return the rows of one product across warehouses."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated row."""

    @abstractmethod
    def delete(self, stock_id: str) -> None:
        """Remove a row permanently."""
