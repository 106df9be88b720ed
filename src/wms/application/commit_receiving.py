"""Application service: Commit Receiving use case.

Applies the scanned totals of a session to the stock ledger and marks
the session COMPLETED in one unit of work.  If any line fails, nothing
is stocked and the session keeps its previous status.  A COMPLETED
session always has its quantities in the ledger.
"""

from __future__ import annotations

from wms.application.dto import CommitResultDTO, CommittedLineDTO
from wms.domain.exceptions import ConflictError, EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.notification_sink import NotificationSink, NullNotificationSink
from wms.domain.service.stock_ledger_service import StockLedgerService
from wms.logging_config import get_logger

logger = get_logger("application.commit_receiving")


class CommitReceivingHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifications = notifications or NullNotificationSink()

    def handle(self, session_id: str) -> CommitResultDTO:
        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            if session.is_completed:
                raise ConflictError(f"Receiving session {session_id} is already completed")
            if session.total_scanned <= 0:
                raise ConflictError(
                    f"Receiving session {session_id} has no scanned units to commit"
                )

            warnings = session.warnings()
            ledger = StockLedgerService(self._uow.stock)
            committed: list[CommittedLineDTO] = []
            for product_id, quantity in session.commit_lines():
                if self._uow.products.get_by_id(product_id) is None:
                    raise EntityNotFoundError(
                        f"Product '{product_id}' mapped in session {session_id} not found"
                    )
                row = ledger.receive(product_id, session.warehouse_id, quantity)
                committed.append(
                    CommittedLineDTO(
                        product_id=product_id,
                        quantity=quantity,
                        stock_id=row.id,
                        new_quantity=row.quantity,
                    )
                )

            session.complete()
            self._uow.receiving.save(session)
            self._uow.commit()

        for warning in warnings:
            logger.warning("receiving_warning", extra={"session_id": session_id, "warning": warning})
        logger.info(
            "receiving_committed",
            extra={"session_id": session_id, "lines": len(committed),
                   "units": session.total_scanned},
        )
        self._notifications.emit(
            "receiving_committed",
            f"Receiving {session.invoice_number or session.id} completed: "
            f"{session.total_scanned} units in {len(committed)} positions",
            session_id=session_id,
            warehouse_id=session.warehouse_id,
        )
        return CommitResultDTO(
            session_id=session.id,
            warehouse_id=session.warehouse_id,
            lines=committed,
            warnings=warnings,
        )
