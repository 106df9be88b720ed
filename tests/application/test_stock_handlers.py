"""Integration tests for the stock ledger use cases."""

import pytest

from wms.application.adjust_stock import AdjustStockHandler
from wms.application.create_stock import CreateStockHandler
from wms.application.delete_stock import DeleteStockHandler
from wms.application.show_availability import ShowAvailabilityHandler
from wms.application.show_stock import ShowStockHandler
from wms.application.update_stock import UpdateStockHandler
from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.asset import Asset
from wms.domain.model.location import Warehouse
from wms.domain.model.product import Product
from wms.domain.model.stock import StockItem
from tests.fakes import FakeStockRepository, FakeUnitOfWork


def _uow(items=None, assets=None):
    return FakeUnitOfWork(
        products=[
            Product(id="P1", name="Widget", sku="abc"),
            Product(id="P2", name="Gadget", sku="def"),
        ],
        warehouses=[Warehouse(id="W1", name="Central"), Warehouse(id="W2", name="North")],
        stock=FakeStockRepository(items),
        assets=assets,
    )


class TestCreateStock:

    def test_second_create_accumulates(self):
        uow = _uow()
        handler = CreateStockHandler(uow)

        first = handler.handle("P1", "W1", 5)
        second = handler.handle("P1", "W1", 3)

        assert second.id == first.id
        assert uow.stock.get_by_id(first.id).quantity == 8
        assert uow.commits == 2

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            CreateStockHandler(_uow()).handle("P1", "W1", -1)

    def test_unknown_product_rejected(self):
        uow = _uow()
        with pytest.raises(EntityNotFoundError, match="Product 'P9'"):
            CreateStockHandler(uow).handle("P9", "W1", 1)
        assert uow.stock.list_all() == []


class TestAdjustStock:

    def test_adjust_within_available(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=5)])
        item = AdjustStockHandler(uow).handle("STK-1", -5)
        assert item.quantity == 0

    def test_adjust_below_available_rejected(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=5, reserved=2)])
        with pytest.raises(ValidationError, match="would leave -1 available"):
            AdjustStockHandler(uow).handle("STK-1", -4)
        assert uow.stock.get_by_id("STK-1").quantity == 5

    def test_audit_correction_may_go_negative(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=1)])
        item = AdjustStockHandler(uow).handle("STK-1", -3, allow_negative=True)
        assert item.quantity == -2
        assert uow.stock.get_by_id("STK-1").quantity == -2

    def test_unknown_row_rejected(self):
        with pytest.raises(EntityNotFoundError):
            AdjustStockHandler(_uow()).handle("STK-9", 1)


class TestUpdateAndDelete:

    def test_update_threshold(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=5)])
        UpdateStockHandler(uow).handle("STK-1", min_quantity=4)
        assert uow.stock.get_by_id("STK-1").min_quantity == 4

    def test_delete_reserved_row_rejected(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=5, reserved=1)])
        with pytest.raises(ConflictError, match="reserved"):
            DeleteStockHandler(uow).handle("STK-1")
        assert uow.stock.get_by_id("STK-1") is not None

    def test_delete(self):
        uow = _uow([StockItem("STK-1", "P1", "W1", quantity=5)])
        DeleteStockHandler(uow).handle("STK-1")
        assert uow.stock.get_by_id("STK-1") is None


class TestQueries:

    def test_show_stock_low_only(self):
        uow = _uow([
            StockItem("STK-1", "P1", "W1", quantity=10, min_quantity=2),
            StockItem("STK-2", "P2", "W1", quantity=1, min_quantity=2),
            StockItem("STK-3", "P2", "W2", quantity=0),
        ])
        lines = ShowStockHandler(uow).handle(low_only=True)
        assert [(line.id, line.level) for line in lines] == [("STK-2", "LOW"), ("STK-3", "OUT")]
        assert lines[0].product_name == "Gadget"

    def test_show_stock_by_warehouse(self):
        uow = _uow([
            StockItem("STK-1", "P1", "W1", quantity=10),
            StockItem("STK-2", "P1", "W2", quantity=4),
        ])
        lines = ShowStockHandler(uow).handle(warehouse_id="W2")
        assert [line.warehouse_name for line in lines] == ["North"]

    def test_availability_sums_stock_and_assets(self):
        assets = [
            Asset.register(product_id="P1", serial_number="SN-1", warehouse_id="W1"),
            Asset.register(product_id="P1", serial_number="SN-2", warehouse_id="W2"),
            Asset.virtual("P1", "S1"),
        ]
        uow = _uow(
            [StockItem("STK-1", "P1", "W1", quantity=10, reserved=3),
             StockItem("STK-2", "P1", "W2", quantity=2)],
            assets=assets,
        )
        everywhere = ShowAvailabilityHandler(uow).handle("P1")
        assert everywhere.stock_available == 9
        assert everywhere.assets_available == 2
        assert everywhere.total == 11

        central = ShowAvailabilityHandler(uow).handle("P1", "W1")
        assert central.total == 8
