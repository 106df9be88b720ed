"""Application service: Delete Scan use case.

Removes one entry from a line's scan log; the line total is recomputed
from the remaining entries.
"""

from __future__ import annotations

from wms.application.dto import ReceivingItemDTO, receiving_session_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class DeleteScanHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str, item_id: str, scan_id: str) -> ReceivingItemDTO:
        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            session.remove_scan(item_id, scan_id)
            self._uow.receiving.save(session)
            self._uow.commit()

        dto = receiving_session_dto(session)
        return next(item for item in dto.items if item.id == item_id)
