"""Domain service: Stock Ledger.

The ledger keeps one row per (product, warehouse).  Receiving into a pair
that already holds stock accumulates into the existing row instead of
replacing it, so repeated intakes into the same bin add up.

Adjustments are increments applied to the row loaded inside the caller's
unit of work; they are never computed from an earlier read.  The ledger
does not clamp at zero; see ``StockItem``.
"""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.stock import StockItem
from wms.domain.repository.stock_repository import StockRepository
from wms.logging_config import get_logger

logger = get_logger("stock_ledger")


class StockLedgerService:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def receive(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        min_quantity: int | None = None,
    ) -> StockItem:
        """Upsert-by-increment for a (product, warehouse) pair."""
        item = self._stock_repo.get_by_product_and_warehouse(product_id, warehouse_id)
        if item is None:
            item = StockItem.open(product_id, warehouse_id, quantity, min_quantity)
            logger.info(
                "stock_row_opened",
                extra={"stock_id": item.id, "product_id": product_id,
                       "warehouse_id": warehouse_id, "quantity": quantity},
            )
        else:
            item.increase(quantity, min_quantity)
            logger.info(
                "stock_row_increased",
                extra={"stock_id": item.id, "delta": quantity, "quantity": item.quantity},
            )
        self._stock_repo.save(item)
        return item

    def adjust(self, stock_id: str, delta: int) -> StockItem:
        item = self.get(stock_id)
        item.adjust(delta)
        self._stock_repo.save(item)
        if item.quantity < 0 or item.available < 0:
            logger.warning(
                "stock_negative",
                extra={"stock_id": item.id, "quantity": item.quantity,
                       "available": item.available},
            )
        return item

    def update(
        self,
        stock_id: str,
        min_quantity: int | None = None,
        reserved: int | None = None,
    ) -> StockItem:
        item = self.get(stock_id)
        item.update(min_quantity=min_quantity, reserved=reserved)
        self._stock_repo.save(item)
        if item.reserved > item.quantity:
            logger.warning(
                "stock_over_reserved",
                extra={"stock_id": item.id, "quantity": item.quantity,
                       "reserved": item.reserved},
            )
        return item

    def delete(self, stock_id: str) -> StockItem:
        item = self.get(stock_id)
        self._stock_repo.delete(stock_id)
        return item

    def get(self, stock_id: str) -> StockItem:
        item = self._stock_repo.get_by_id(stock_id)
        if item is None:
            raise EntityNotFoundError(f"Stock item '{stock_id}' not found")
        return item
