"""Application service: Load Reference Data use case.

Imports catalog and location entries maintained by other systems.
Existing entries with the same id are replaced.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ValidationError
from wms.domain.model.location import Store, Warehouse
from wms.domain.model.product import Product
from wms.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ReferenceCounts:
    products: int
    warehouses: int
    stores: int


class LoadReferenceDataHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, payload: dict) -> ReferenceCounts:
        try:
            products = [
                Product(id=str(raw["id"]), name=raw["name"], sku=raw["sku"],
                        category=raw.get("category"))
                for raw in payload.get("products", [])
            ]
            warehouses = [
                Warehouse(id=str(raw["id"]), name=raw["name"])
                for raw in payload.get("warehouses", [])
            ]
            stores = [
                Store(id=str(raw["id"]), name=raw["name"], address=raw.get("address"))
                for raw in payload.get("stores", [])
            ]
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValidationError(f"Malformed reference data: {exc}") from exc

        with self._uow:
            for product in products:
                existing = self._uow.products.get_by_sku(product.sku)
                if existing is not None and existing.id != product.id:
                    raise ValidationError(f"SKU '{product.sku}' already belongs to {existing.id}")
                self._uow.products.save(product)
            for warehouse in warehouses:
                self._uow.locations.save_warehouse(warehouse)
            for store in stores:
                self._uow.locations.save_store(store)
            self._uow.commit()

        return ReferenceCounts(len(products), len(warehouses), len(stores))
