"""Unit tests for ScanMode and the box-mode selector."""

import pytest

from wms.domain.exceptions import ConflictError, ValidationError
from wms.domain.model.scan_mode import ScanMode, ScanModeSelector


class TestScanMode:

    def test_single_counts_one(self):
        assert ScanMode.single().quantity_per_scan == 1
        assert not ScanMode.single().is_box

    def test_boxed_counts_multiplier(self):
        mode = ScanMode.boxed(12)
        assert mode.is_box
        assert mode.quantity_per_scan == 12
        assert mode.tag("abc") == "BOX: abc"

    def test_multiplier_below_one_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            ScanMode.boxed(0)


class TestScanModeSelector:

    def test_starts_in_single_mode(self):
        selector = ScanModeSelector()
        assert selector.mode == ScanMode.single()
        assert not selector.is_configuring

    def test_confirm_enables_box_mode(self):
        selector = ScanModeSelector()
        assert selector.begin_box_configuration() == 10
        selector.propose(12)
        mode = selector.confirm()
        assert mode.quantity_per_scan == 12
        assert selector.mode == mode
        assert not selector.is_configuring

    def test_cancel_keeps_previous_mode(self):
        selector = ScanModeSelector()
        selector.begin_box_configuration()
        selector.propose(6)
        selector.confirm()

        selector.begin_box_configuration()
        selector.propose(20)
        selector.cancel()
        assert selector.mode.quantity_per_scan == 6

    def test_cancel_from_single_stays_single(self):
        selector = ScanModeSelector()
        selector.begin_box_configuration()
        selector.cancel()
        assert selector.mode == ScanMode.single()

    def test_invalid_multiplier_keeps_dialog_open(self):
        selector = ScanModeSelector()
        selector.begin_box_configuration()
        selector.propose(0)
        with pytest.raises(ValidationError):
            selector.confirm()
        assert selector.is_configuring
        assert selector.pending_multiplier == 0
        assert selector.mode == ScanMode.single()

    def test_last_multiplier_is_remembered(self):
        selector = ScanModeSelector()
        selector.begin_box_configuration()
        selector.propose(12)
        selector.confirm()
        selector.disable_box_mode()
        assert selector.mode == ScanMode.single()
        assert selector.begin_box_configuration() == 12

    def test_propose_without_dialog_rejected(self):
        with pytest.raises(ConflictError, match="not open"):
            ScanModeSelector().propose(6)
