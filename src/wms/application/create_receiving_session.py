"""Application service: Create Receiving Session use case.

Opens a session from invoice lines.  Each line is mapped to a catalog
product by its explicit ``product_id`` or, failing that, by SKU.  Lines
that cannot be mapped stay open for manual mapping.
"""

from __future__ import annotations

from wms.application.dto import ReceivingLineSpec, ReceivingSessionDTO, receiving_session_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.receiving import ReceivingItem, ReceivingSession
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.logging_config import get_logger

logger = get_logger("application.create_receiving_session")


class CreateReceivingSessionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        warehouse_id: str,
        lines: list[ReceivingLineSpec],
        invoice_number: str | None = None,
        supplier: str | None = None,
    ) -> ReceivingSessionDTO:
        with self._uow:
            if self._uow.locations.get_warehouse(warehouse_id) is None:
                raise EntityNotFoundError(f"Warehouse '{warehouse_id}' not found")

            items = [build_item(self._uow, spec) for spec in lines]
            session = ReceivingSession.open(
                warehouse_id=warehouse_id,
                items=items,
                invoice_number=invoice_number,
                supplier=supplier,
            )
            self._uow.receiving.save(session)
            self._uow.commit()

        logger.info(
            "receiving_session_opened",
            extra={"session_id": session.id, "warehouse_id": warehouse_id,
                   "lines": len(items)},
        )
        return receiving_session_dto(session)


def build_item(uow: UnitOfWork, spec: ReceivingLineSpec) -> ReceivingItem:
    """Build a line, resolving its product by id or SKU."""
    product_id = spec.product_id
    if product_id:
        if uow.products.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
    elif spec.sku:
        product = uow.products.get_by_sku(spec.sku)
        product_id = product.id if product else None
    return ReceivingItem.create(
        name=spec.name,
        expected_quantity=spec.expected_quantity,
        sku=spec.sku,
        product_id=product_id,
    )
