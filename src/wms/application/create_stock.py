"""Application service: Create Stock use case.

Receiving into a (product, warehouse) pair that already holds stock
increments the existing row; it never overwrites it.
"""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.model.stock import StockItem
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.stock_ledger_service import StockLedgerService


class CreateStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        min_quantity: int | None = None,
    ) -> StockItem:
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative — use an adjustment")

        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            if self._uow.locations.get_warehouse(warehouse_id) is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")

            ledger = StockLedgerService(self._uow.stock)
            item = ledger.receive(product_id, warehouse_id, quantity, min_quantity)
            self._uow.commit()
        return item
