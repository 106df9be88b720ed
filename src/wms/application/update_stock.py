"""Application service: Update Stock use case (threshold / reservation)."""

from __future__ import annotations

from wms.domain.model.stock import StockItem
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.stock_ledger_service import StockLedgerService


class UpdateStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        stock_id: str,
        min_quantity: int | None = None,
        reserved: int | None = None,
    ) -> StockItem:
        with self._uow:
            item = StockLedgerService(self._uow.stock).update(
                stock_id, min_quantity=min_quantity, reserved=reserved
            )
            self._uow.commit()
        return item
