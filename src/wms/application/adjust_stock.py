"""Application service: Adjust Stock use case.

The ledger accepts any signed delta.  This handler is where the default
workflow refuses to push available stock below zero; audits pass
``allow_negative=True`` to record a corrective adjustment anyway.
"""

from __future__ import annotations

from wms.domain.exceptions import ValidationError
from wms.domain.model.stock import StockItem
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.stock_ledger_service import StockLedgerService
from wms.logging_config import get_logger

logger = get_logger("application.adjust_stock")


class AdjustStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, stock_id: str, delta: int, allow_negative: bool = False) -> StockItem:
        with self._uow:
            ledger = StockLedgerService(self._uow.stock)
            current = ledger.get(stock_id)

            after = current.available_after(delta)
            if after < 0:
                if not allow_negative:
                    raise ValidationError(
                        f"Adjustment of {delta:+d} would leave {after} available "
                        f"(on hand {current.quantity}, reserved {current.reserved})"
                    )
                logger.warning(
                    "negative_stock_allowed",
                    extra={"stock_id": stock_id, "delta": delta, "available": after},
                )

            item = ledger.adjust(stock_id, delta)
            self._uow.commit()
        return item
