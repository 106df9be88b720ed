"""JSON-document-backed implementation of StockRepository."""

from __future__ import annotations

from wms.domain.exceptions import ConflictError
from wms.domain.model.stock import StockItem
from wms.domain.repository.stock_repository import StockRepository


class JsonStockRepository(StockRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- StockRepository interface --------------------------------------------

    def get_by_id(self, stock_id: str) -> StockItem | None:
        for raw in self._records:
            if raw["id"] == stock_id:
                return self._to_domain(raw)
        return None

    def get_by_product_and_warehouse(
        self, product_id: str, warehouse_id: str
    ) -> StockItem | None:
        for raw in self._records:
            if raw["product_id"] == product_id and raw["warehouse_id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_all(self, warehouse_id: str | None = None) -> list[StockItem]:
        return [
            self._to_domain(raw)
            for raw in self._records
            if warehouse_id is None or raw["warehouse_id"] == warehouse_id
        ]

    def list_by_product(self, product_id: str) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._records if raw["product_id"] == product_id]

    def save(self, item: StockItem) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == item.id:
                self._records[i] = self._to_raw(item)
                return
            # (product_id, warehouse_id) is unique
            if raw["product_id"] == item.product_id and raw["warehouse_id"] == item.warehouse_id:
                raise ConflictError(
                    f"Stock for product {item.product_id} at warehouse "
                    f"{item.warehouse_id} already exists as {raw['id']}"
                )
        self._records.append(self._to_raw(item))

    def delete(self, stock_id: str) -> None:
        self._records[:] = [raw for raw in self._records if raw["id"] != stock_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "id": item.id,
            "product_id": item.product_id,
            "warehouse_id": item.warehouse_id,
            "quantity": item.quantity,
            "reserved": item.reserved,
            "min_quantity": item.min_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        return StockItem(
            id=raw["id"],
            product_id=raw["product_id"],
            warehouse_id=raw["warehouse_id"],
            quantity=raw["quantity"],
            reserved=raw.get("reserved", 0),
            min_quantity=raw.get("min_quantity", 0),
        )
