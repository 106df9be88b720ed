"""Application service: Show Receiving Session use cases (queries)."""

from __future__ import annotations

from wms.application.dto import ReceivingSessionDTO, receiving_session_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowReceivingSessionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str) -> ReceivingSessionDTO:
        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            return receiving_session_dto(session)


class ListReceivingSessionsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ReceivingSessionDTO]:
        with self._uow:
            sessions = sorted(self._uow.receiving.list_all(), key=lambda s: s.created_at)
            return [receiving_session_dto(session) for session in sessions]
