"""Application service: Manual Entry use case.

Records an operator-typed signed quantity against one line.  Zero is
rejected before anything is loaded.
"""

from __future__ import annotations

from wms.application.dto import ScanResultDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.value_objects import ManualQuantity
from wms.domain.repository.unit_of_work import UnitOfWork


class ManualEntryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str, item_id: str, quantity: int | str) -> ScanResultDTO:
        if isinstance(quantity, str):
            manual = ManualQuantity.parse(quantity)
        else:
            manual = ManualQuantity(quantity)

        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            scan = session.record_manual(item_id, manual)
            item = session.find_item(item_id)
            self._uow.receiving.save(session)
            self._uow.commit()

        return ScanResultDTO(
            matched=True,
            code="",
            message=f"{item.name}: manual {manual}",
            item_id=item.id,
            item_name=item.name,
            quantity=scan.quantity,
            scanned_quantity=item.scanned_quantity,
            expected_quantity=item.expected_quantity,
            scan_id=scan.id,
        )
