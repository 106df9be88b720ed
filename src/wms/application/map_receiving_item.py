"""Application service: Map Receiving Item use case.

Links an invoice line to a catalog product so its scanned quantity can
be stocked on commit.
"""

from __future__ import annotations

from wms.application.dto import ReceivingSessionDTO, receiving_session_dto
from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.repository.unit_of_work import UnitOfWork


class MapReceivingItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, session_id: str, item_id: str, product_id: str) -> ReceivingSessionDTO:
        if not product_id or not product_id.strip():
            raise ValidationError("A product must be selected to map this line")

        with self._uow:
            session = self._uow.receiving.get_by_id(session_id)
            if session is None:
                raise EntityNotFoundError(f"Receiving session '{session_id}' not found")
            if self._uow.products.get_by_id(product_id.strip()) is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            session.map_item(item_id, product_id)
            self._uow.receiving.save(session)
            self._uow.commit()
        return receiving_session_dto(session)
