"""Application service: Scan Code use case.

Handles one event from the barcode input stream.  The code is matched
against the session's lines (SKU or name, ignoring case, first match
wins).  An unknown code is reported back with ``matched=False`` and
changes nothing.

The scan mode is passed in on every call; it belongs to the operator,
not to the session.
"""

from __future__ import annotations

from wms.application.dto import ScanResultDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.scan_mode import ScanMode
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.logging_config import get_logger

logger = get_logger("application.scan_code")


class ScanCodeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str, code: str, mode: ScanMode | None = None) -> ScanResultDTO:
        mode = mode or ScanMode.single()
        code = (code or "").strip()

        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")

            item = session.match(code) if code else None
            if item is None:
                logger.info("scan_unmatched", extra={"session_id": session_id, "code": code})
                return ScanResultDTO(
                    matched=False,
                    code=code,
                    message=f"Item not found for code '{code}'",
                )

            scan = session.record_scan(item.id, code, mode)
            self._uow.receiving.save(session)
            self._uow.commit()

        if item.is_over_received:
            logger.warning(
                "over_receipt",
                extra={"session_id": session_id, "item_id": item.id,
                       "scanned": item.scanned_quantity,
                       "expected": item.expected_quantity},
            )
        return ScanResultDTO(
            matched=True,
            code=code,
            message=f"{item.name}: +{scan.quantity} ({mode})",
            item_id=item.id,
            item_name=item.name,
            quantity=scan.quantity,
            scanned_quantity=item.scanned_quantity,
            expected_quantity=item.expected_quantity,
            scan_id=scan.id,
        )
