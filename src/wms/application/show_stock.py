"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from wms.application.dto import StockLineDTO
from wms.domain.model.stock import StockItem
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: str | None = None, low_only: bool = False) -> list[StockLineDTO]:
        with self._uow:
            items = self._uow.stock.list_all(warehouse_id)
            if low_only:
                items = [item for item in items if item.is_low or item.is_out]
            lines = [self._to_dto(item) for item in items]
        return sorted(lines, key=lambda line: (line.product_name.lower(), line.warehouse_name))

    def _to_dto(self, item: StockItem) -> StockLineDTO:
        product = self._uow.products.get_by_id(item.product_id)
        warehouse = self._uow.locations.get_warehouse(item.warehouse_id)
        return StockLineDTO(
            id=item.id,
            product_id=item.product_id,
            product_name=product.name if product else item.product_id,
            warehouse_id=item.warehouse_id,
            warehouse_name=warehouse.name if warehouse else item.warehouse_id,
            quantity=item.quantity,
            reserved=item.reserved,
            available=item.available,
            min_quantity=item.min_quantity,
            level=item.level.value,
        )
