"""Abstract unit of work — the transaction boundary of every use case.

Usage::

    with uow:
        item = uow.stock.get_by_id(stock_id)
        item.adjust(-2)
        uow.stock.save(item)
        uow.commit()

Leaving the block without ``commit()``, or because of an exception,
rolls back every change made through the repositories.  Implementations
serialize units of work that touch the same data, so read-modify-write
sequences inside one block never lose updates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from wms.domain.repository.asset_repository import AssetRepository
from wms.domain.repository.delivery_repository import DeliveryRepository
from wms.domain.repository.location_repository import LocationRepository
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.receiving_repository import ReceivingSessionRepository
from wms.domain.repository.shipment_repository import ShipmentRepository
from wms.domain.repository.stock_repository import StockRepository
from wms.logging_config import get_logger

logger = get_logger("unit_of_work")


class UnitOfWork(ABC):

    products: ProductRepository
    locations: LocationRepository
    stock: StockRepository
    assets: AssetRepository
    receiving: ReceivingSessionRepository
    shipments: ShipmentRepository
    deliveries: DeliveryRepository

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self._begin()
        logger.debug("transaction_started")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                self.rollback()
                logger.warning("transaction_rolled_back", exc_info=(exc_type, exc, tb))
            elif not self._committed:
                self.rollback()
                logger.debug("transaction_discarded")
        finally:
            self._end()

    def commit(self) -> None:
        self._commit()
        self._committed = True
        logger.debug("transaction_committed")

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change made since the unit of work began."""

    @abstractmethod
    def _begin(self) -> None:
        """Acquire isolation and load state."""

    @abstractmethod
    def _commit(self) -> None:
        """Make the changes durable in one step."""

    def _end(self) -> None:
        """Release whatever ``_begin()`` acquired."""
