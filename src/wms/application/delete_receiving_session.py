"""Application service: Delete Receiving Session use case.

Only sessions that have not been committed can be deleted; their lines
and scan logs go with them.
"""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class DeleteReceivingSessionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str) -> None:
        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            session.ensure_deletable()
            self._uow.receiving.delete(session_id)
            self._uow.commit()
