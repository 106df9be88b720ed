"""Application service: Show Reference Data use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.model.location import Store, Warehouse
from wms.domain.model.product import Product
from wms.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ReferenceData:
    products: list[Product]
    warehouses: list[Warehouse]
    stores: list[Store]


class ShowReferenceDataHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> ReferenceData:
        with self._uow:
            return ReferenceData(
                products=sorted(self._uow.products.list_all(), key=lambda p: p.name.lower()),
                warehouses=sorted(self._uow.locations.list_warehouses(), key=lambda w: w.name.lower()),
                stores=sorted(self._uow.locations.list_stores(), key=lambda s: s.name.lower()),
            )
