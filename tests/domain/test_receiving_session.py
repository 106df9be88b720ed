"""Unit tests for the ReceivingSession aggregate."""

import pytest

from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.receiving import ReceivingItem, ReceivingSession, ReceivingStatus
from wms.domain.model.scan_mode import ScanMode
from wms.domain.model.value_objects import ManualQuantity


def _session(*items):
    if not items:
        items = (ReceivingItem.create("Widget", 10, sku="abc", product_id="P1"),)
    return ReceivingSession.open("W1", list(items), invoice_number="INV-1")


class TestScanning:

    def test_single_box_and_manual_accumulate(self):
        session = _session()
        item = session.items[0]

        session.record_scan(item.id, "abc", ScanMode.single())
        assert item.scanned_quantity == 1

        session.record_scan(item.id, "abc", ScanMode.boxed(10))
        assert item.scanned_quantity == 11

        session.record_manual(item.id, ManualQuantity(-2))
        assert item.scanned_quantity == 9
        assert len(item.scans) == 3

    def test_first_scan_moves_to_in_progress(self):
        session = _session()
        assert session.status == ReceivingStatus.DRAFT
        session.record_scan(session.items[0].id, "abc", ScanMode.single())
        assert session.status == ReceivingStatus.IN_PROGRESS

    def test_box_scan_is_tagged(self):
        session = _session()
        scan = session.record_scan(session.items[0].id, "abc", ScanMode.boxed(6))
        assert scan.code == "BOX: abc"
        assert scan.quantity == 6
        assert not scan.is_manual

    def test_empty_code_rejected(self):
        session = _session()
        with pytest.raises(ValidationError, match="empty"):
            session.record_scan(session.items[0].id, "  ", ScanMode.single())

    def test_remove_scan_recomputes_total(self):
        session = _session()
        item = session.items[0]
        first = session.record_scan(item.id, "abc", ScanMode.boxed(10))
        session.record_scan(item.id, "abc", ScanMode.boxed(10))
        session.record_scan(item.id, "abc", ScanMode.single())
        assert item.scanned_quantity == 21

        session.remove_scan(item.id, first.id)
        assert item.scanned_quantity == 11

    def test_remove_unknown_scan(self):
        session = _session()
        with pytest.raises(EntityNotFoundError, match="Scan"):
            session.remove_scan(session.items[0].id, "SCN-missing")


class TestMatching:

    def test_match_by_sku_ignoring_case(self):
        session = _session()
        assert session.match("ABC") is session.items[0]

    def test_match_by_name(self):
        session = _session()
        assert session.match("widget") is session.items[0]

    def test_first_match_wins(self):
        first = ReceivingItem.create("Cable", 5, sku="c1")
        second = ReceivingItem.create("c1", 5)
        session = _session(first, second)
        assert session.match("C1") is first

    def test_unknown_code(self):
        assert _session().match("zzz") is None


class TestCompletion:

    def test_complete_with_nothing_scanned_rejected(self):
        session = _session()
        with pytest.raises(ConflictError, match="no scanned units"):
            session.complete()
        assert session.status == ReceivingStatus.DRAFT

    def test_complete_twice_rejected(self):
        session = _session()
        session.record_scan(session.items[0].id, "abc", ScanMode.single())
        session.complete()
        assert session.completed_at is not None
        with pytest.raises(ConflictError, match="already completed"):
            session.complete()

    def test_completed_session_is_frozen(self):
        session = _session()
        session.record_scan(session.items[0].id, "abc", ScanMode.single())
        session.complete()
        with pytest.raises(ConflictError, match="can no longer change"):
            session.record_scan(session.items[0].id, "abc", ScanMode.single())
        with pytest.raises(ConflictError, match="cannot be deleted"):
            session.ensure_deletable()

    def test_commit_lines_skip_unmapped_and_zero(self):
        mapped = ReceivingItem.create("Widget", 10, product_id="P1")
        unmapped = ReceivingItem.create("Mystery", 3)
        untouched = ReceivingItem.create("Gadget", 4, product_id="P2")
        session = _session(mapped, unmapped, untouched)
        session.record_scan(mapped.id, "Widget", ScanMode.boxed(6))
        session.record_scan(unmapped.id, "Mystery", ScanMode.single())

        assert session.commit_lines() == [("P1", 6)]
        assert session.unmapped_scanned_items() == [unmapped]


class TestProgressAndWarnings:

    def test_progress_is_clamped(self):
        session = _session()
        session.record_scan(session.items[0].id, "abc", ScanMode.boxed(20))
        assert session.progress_percent == 100

    def test_progress_with_nothing_expected(self):
        session = _session(ReceivingItem.create("Extra", 0))
        assert session.progress_percent == 0
        session.record_manual(session.items[0].id, ManualQuantity(2))
        assert session.progress_percent == 100

    def test_zero_progress_warning(self):
        assert _session().warnings() == ["Nothing has been scanned yet"]

    def test_over_receipt_and_unmapped_warnings(self):
        item = ReceivingItem.create("Mystery", 1)
        session = _session(item)
        session.record_scan(item.id, "mystery", ScanMode.boxed(6))
        warnings = session.warnings()
        assert any("Over-receipt on 'Mystery'" in w for w in warnings)
        assert any("not mapped" in w for w in warnings)

    def test_negative_expected_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ReceivingItem.create("Widget", -1)

    def test_blank_product_mapping_rejected(self):
        session = _session(ReceivingItem.create("Mystery", 1))
        with pytest.raises(ValidationError, match="product must be selected"):
            session.map_item(session.items[0].id, " ")
