"""Application service: Available-to-promise query.

A product is available in two forms: counted stock rows and individual
AVAILABLE assets.  Both are summed here.
"""

from __future__ import annotations

from wms.application.dto import AvailabilityDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowAvailabilityHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, warehouse_id: str | None = None) -> AvailabilityDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")

            rows = self._uow.stock.list_by_product(product_id)
            if warehouse_id is not None:
                rows = [row for row in rows if row.warehouse_id == warehouse_id]
            stock_available = sum(max(row.available, 0) for row in rows)

            assets = self._uow.assets.find_available(product_id, warehouse_id)

        return AvailabilityDTO(
            product_id=product.id,
            product_name=product.name,
            stock_available=stock_available,
            assets_available=len(assets),
        )
