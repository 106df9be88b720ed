"""Application service: Delete Stock use case (administrative removal)."""

from __future__ import annotations

from wms.domain.exceptions import ConflictError
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.stock_ledger_service import StockLedgerService


class DeleteStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, stock_id: str) -> None:
        with self._uow:
            ledger = StockLedgerService(self._uow.stock)
            item = ledger.get(stock_id)
            if item.reserved > 0:
                raise ConflictError(
                    f"Stock item '{stock_id}' still has {item.reserved} reserved"
                )
            ledger.delete(stock_id)
            self._uow.commit()
