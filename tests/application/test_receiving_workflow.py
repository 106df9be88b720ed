"""Integration tests for the receiving use cases (scan -> commit)."""

import pytest

from wms.application.add_receiving_line import AddReceivingLineHandler
from wms.application.commit_receiving import CommitReceivingHandler
from wms.application.create_receiving_session import CreateReceivingSessionHandler
from wms.application.delete_receiving_session import DeleteReceivingSessionHandler
from wms.application.delete_scan import DeleteScanHandler
from wms.application.dto import ReceivingLineSpec
from wms.application.manual_entry import ManualEntryHandler
from wms.application.map_receiving_item import MapReceivingItemHandler
from wms.application.scan_code import ScanCodeHandler
from wms.application.show_receiving_session import ShowReceivingSessionHandler
from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.location import Warehouse
from wms.domain.model.product import Product
from wms.domain.model.receiving import ReceivingStatus
from wms.domain.model.scan_mode import ScanMode
from wms.domain.model.stock import StockItem
from tests.fakes import FailingStockRepository, FakeUnitOfWork, RecordingNotificationSink


def _uow(stock=None):
    return FakeUnitOfWork(
        products=[
            Product(id="P1", name="Widget", sku="abc"),
            Product(id="P2", name="Gadget", sku="def"),
            Product(id="P3", name="Gizmo", sku="ghi"),
        ],
        warehouses=[Warehouse(id="W1", name="Central")],
        stock=stock,
    )


def _open(uow, *lines):
    lines = lines or (ReceivingLineSpec("Widget", 10, sku="abc"),)
    return CreateReceivingSessionHandler(uow).handle("W1", list(lines), invoice_number="INV-7")


class TestCreateSession:

    def test_lines_are_mapped_by_sku(self):
        uow = _uow()
        dto = _open(uow, ReceivingLineSpec("Widget", 10, sku="ABC"),
                    ReceivingLineSpec("Unknown", 2, sku="zzz"))
        assert dto.status == "DRAFT"
        assert dto.items[0].product_id == "P1"
        assert dto.items[1].product_id is None
        assert dto.total_expected == 12

    def test_explicit_unknown_product_rejected(self):
        uow = _uow()
        with pytest.raises(EntityNotFoundError, match="Product 'P9'"):
            _open(uow, ReceivingLineSpec("Widget", 1, product_id="P9"))
        assert uow.receiving.list_all() == []

    def test_unknown_warehouse_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Warehouse"):
            CreateReceivingSessionHandler(_uow()).handle("W9", [])

    def test_add_and_map_line(self):
        uow = _uow()
        dto = _open(uow)
        dto = AddReceivingLineHandler(uow).handle(dto.id, ReceivingLineSpec("Mystery", 3))
        line = dto.items[1]
        assert line.product_id is None

        dto = MapReceivingItemHandler(uow).handle(dto.id, line.id, "P2")
        assert dto.items[1].product_id == "P2"

    def test_map_unknown_product_rejected(self):
        uow = _uow()
        dto = _open(uow)
        with pytest.raises(EntityNotFoundError, match="P9"):
            MapReceivingItemHandler(uow).handle(dto.id, dto.items[0].id, "P9")


class TestScanning:

    def test_single_box_manual_then_commit(self):
        uow = _uow()
        sink = RecordingNotificationSink()
        dto = _open(uow)
        item_id = dto.items[0].id

        result = ScanCodeHandler(uow).handle(dto.id, "abc")
        assert result.matched
        assert result.scanned_quantity == 1

        result = ScanCodeHandler(uow).handle(dto.id, "abc", ScanMode.boxed(10))
        assert result.scanned_quantity == 11

        result = ManualEntryHandler(uow).handle(dto.id, item_id, -2)
        assert result.scanned_quantity == 9

        commit = CommitReceivingHandler(uow, sink).handle(dto.id)
        assert commit.updated_count == 1
        assert commit.lines[0].new_quantity == 9

        row = uow.stock.get_by_product_and_warehouse("P1", "W1")
        assert row.quantity == 9
        session = uow.receiving.get_by_id(dto.id)
        assert session.status == ReceivingStatus.COMPLETED
        assert sink.names == ["receiving_committed"]

    def test_unknown_code_changes_nothing(self):
        uow = _uow()
        dto = _open(uow)
        commits_before = uow.commits

        result = ScanCodeHandler(uow).handle(dto.id, "nope")

        assert not result.matched
        assert result.message == "Item not found for code 'nope'"
        assert uow.commits == commits_before
        assert uow.receiving.get_by_id(dto.id).total_scanned == 0

    def test_manual_zero_rejected(self):
        uow = _uow()
        dto = _open(uow)
        with pytest.raises(ValidationError, match="cannot be zero"):
            ManualEntryHandler(uow).handle(dto.id, dto.items[0].id, "0")

    def test_delete_scan_recomputes(self):
        uow = _uow()
        dto = _open(uow)
        scan = ScanCodeHandler(uow)
        box = scan.handle(dto.id, "abc", ScanMode.boxed(10))
        scan.handle(dto.id, "abc", ScanMode.boxed(10))
        scan.handle(dto.id, "abc")

        item = DeleteScanHandler(uow).handle(dto.id, box.item_id, box.scan_id)

        assert item.scanned_quantity == 11
        shown = ShowReceivingSessionHandler(uow).handle(dto.id)
        assert shown.total_scanned == 11
        assert len(shown.items[0].scans) == 2


class TestCommit:

    def test_commit_accumulates_into_existing_row(self):
        uow = _uow(stock=None)
        uow.stock.save(StockItem("STK-1", "P1", "W1", quantity=5))
        dto = _open(uow)
        ManualEntryHandler(uow).handle(dto.id, dto.items[0].id, 3)

        CommitReceivingHandler(uow).handle(dto.id)

        assert uow.stock.get_by_id("STK-1").quantity == 8

    def test_commit_twice_rejected(self):
        uow = _uow()
        dto = _open(uow)
        ScanCodeHandler(uow).handle(dto.id, "abc")
        CommitReceivingHandler(uow).handle(dto.id)

        with pytest.raises(ConflictError, match="already completed"):
            CommitReceivingHandler(uow).handle(dto.id)
        assert uow.stock.get_by_product_and_warehouse("P1", "W1").quantity == 1

    def test_commit_with_nothing_scanned_rejected(self):
        uow = _uow()
        dto = _open(uow)
        with pytest.raises(ConflictError, match="no scanned units"):
            CommitReceivingHandler(uow).handle(dto.id)
        assert uow.stock.list_all() == []
        assert uow.receiving.get_by_id(dto.id).status == ReceivingStatus.DRAFT

    def test_storage_failure_rolls_back_every_line(self):
        uow = _uow(stock=FailingStockRepository(fail_on_save=2))
        dto = _open(
            uow,
            ReceivingLineSpec("Widget", 1, sku="abc"),
            ReceivingLineSpec("Gadget", 1, sku="def"),
            ReceivingLineSpec("Gizmo", 1, sku="ghi"),
        )
        for code in ("abc", "def", "ghi"):
            ScanCodeHandler(uow).handle(dto.id, code)

        with pytest.raises(OSError, match="disk full"):
            CommitReceivingHandler(uow).handle(dto.id)

        assert uow.stock.list_all() == []
        session = uow.receiving.get_by_id(dto.id)
        assert session.status == ReceivingStatus.IN_PROGRESS
        assert session.total_scanned == 3

    def test_unmapped_lines_are_skipped_with_warning(self):
        uow = _uow()
        dto = _open(uow, ReceivingLineSpec("Widget", 1, sku="abc"),
                    ReceivingLineSpec("Mystery", 1))
        ScanCodeHandler(uow).handle(dto.id, "abc")
        ScanCodeHandler(uow).handle(dto.id, "mystery")

        result = CommitReceivingHandler(uow).handle(dto.id)

        assert [line.product_id for line in result.lines] == ["P1"]
        assert any("not mapped" in w for w in result.warnings)


class TestDeleteSession:

    def test_delete_open_session(self):
        uow = _uow()
        dto = _open(uow)
        DeleteReceivingSessionHandler(uow).handle(dto.id)
        assert uow.receiving.get_by_id(dto.id) is None

    def test_completed_session_cannot_be_deleted(self):
        uow = _uow()
        dto = _open(uow)
        ScanCodeHandler(uow).handle(dto.id, "abc")
        CommitReceivingHandler(uow).handle(dto.id)
        with pytest.raises(ConflictError, match="cannot be deleted"):
            DeleteReceivingSessionHandler(uow).handle(dto.id)
