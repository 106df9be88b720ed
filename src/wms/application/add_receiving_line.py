"""Application service: Add Receiving Line use case."""

from __future__ import annotations

from wms.application.create_receiving_session import build_item
from wms.application.dto import ReceivingLineSpec, ReceivingSessionDTO, receiving_session_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class AddReceivingLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str, spec: ReceivingLineSpec) -> ReceivingSessionDTO:
        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            session.add_item(build_item(self._uow, spec))
            self._uow.receiving.save(session)
            self._uow.commit()
        return receiving_session_dto(session)
