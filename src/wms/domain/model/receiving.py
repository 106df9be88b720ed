"""ReceivingSession aggregate — the scan-driven intake workspace.

A session holds the expected lines of one invoice.  Operators reconcile
them by scanning barcodes (optionally in box mode) or typing signed
manual quantities.  Every input becomes one entry in the line's scan log;
the scanned total of a line is always the sum of that log, never a
separately stored counter.

Lifecycle::

    DRAFT --first scan--> IN_PROGRESS --complete()--> COMPLETED (terminal)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from wms.domain.model.scan_mode import ScanMode
from wms.domain.model.value_objects import ManualQuantity, new_id


class ReceivingStatus(Enum):
    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class Scan:
    id: str
    quantity: int
    is_manual: bool
    code: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ReceivingItem:
    """One expected invoice line and its scan log."""

    id: str
    name: str
    sku: str | None
    expected_quantity: int
    product_id: str | None = None
    scans: list[Scan] = field(default_factory=list)

    @staticmethod
    def create(
        name: str,
        expected_quantity: int,
        sku: str | None = None,
        product_id: str | None = None,
    ) -> ReceivingItem:
        if not name or not name.strip():
            raise ValidationError("Line name is required")
        if isinstance(expected_quantity, bool) or not isinstance(expected_quantity, int):
            raise ValidationError("Expected quantity must be an integer")
        if expected_quantity < 0:
            raise ValidationError("Expected quantity cannot be negative")
        return ReceivingItem(
            id=new_id("RCI"),
            name=name.strip(),
            sku=sku.strip() if sku and sku.strip() else None,
            expected_quantity=expected_quantity,
            product_id=product_id or None,
        )

    @property
    def scanned_quantity(self) -> int:
        return sum(scan.quantity for scan in self.scans)

    @property
    def remaining_quantity(self) -> int:
        return self.expected_quantity - self.scanned_quantity

    @property
    def is_over_received(self) -> bool:
        return self.scanned_quantity > self.expected_quantity

    @property
    def is_mapped(self) -> bool:
        return self.product_id is not None

    def matches(self, code: str) -> bool:
        """Case-insensitive exact match of ``code`` against SKU or name."""
        needle = code.strip().lower()
        if not needle:
            return False
        if self.sku and self.sku.lower() == needle:
            return True
        return self.name.lower() == needle

    def find_scan(self, scan_id: str) -> Scan:
        for scan in self.scans:
            if scan.id == scan_id:
                return scan
        raise EntityNotFoundError(f"Scan '{scan_id}' not found on line '{self.name}'")


@dataclass
class ReceivingSession:
    """Aggregate root for one intake event.

    Use ``ReceivingSession.open()`` for new sessions; ``__init__`` stays
    simple so repositories can reconstitute persisted ones.
    """

    id: str
    warehouse_id: str
    items: list[ReceivingItem]
    status: ReceivingStatus = ReceivingStatus.DRAFT
    invoice_number: str | None = None
    supplier: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def open(
        warehouse_id: str,
        items: list[ReceivingItem],
        invoice_number: str | None = None,
        supplier: str | None = None,
    ) -> ReceivingSession:
        if not warehouse_id:
            raise ValidationError("Warehouse is required")
        return ReceivingSession(
            id=new_id("REC"),
            warehouse_id=warehouse_id,
            items=list(items),
            invoice_number=invoice_number or None,
            supplier=supplier or None,
        )

    # --- Line management ------------------------------------------------------

    def add_item(self, item: ReceivingItem) -> None:
        self._ensure_open()
        self.items.append(item)

    def map_item(self, item_id: str, product_id: str) -> ReceivingItem:
        self._ensure_open()
        if not product_id or not product_id.strip():
            raise ValidationError("A product must be selected to map this line")
        item = self.find_item(item_id)
        item.product_id = product_id.strip()
        return item

    def find_item(self, item_id: str) -> ReceivingItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError(f"Line '{item_id}' not found in session {self.id}")

    def match(self, code: str) -> ReceivingItem | None:
        """First line whose SKU or name equals ``code``, ignoring case."""
        for item in self.items:
            if item.matches(code):
                return item
        return None

    # --- Scan log -------------------------------------------------------------

    def record_scan(self, item_id: str, code: str, mode: ScanMode) -> Scan:
        """Append one barcode scan, worth ``mode.quantity_per_scan`` units."""
        if not code or not code.strip():
            raise ValidationError("Scanned code is empty")
        self._ensure_open()
        item = self.find_item(item_id)
        scan = Scan(
            id=new_id("SCN"),
            quantity=mode.quantity_per_scan,
            is_manual=False,
            code=mode.tag(code.strip()),
        )
        return self._append(item, scan)

    def record_manual(self, item_id: str, quantity: ManualQuantity) -> Scan:
        self._ensure_open()
        item = self.find_item(item_id)
        scan = Scan(id=new_id("SCN"), quantity=quantity.value, is_manual=True)
        return self._append(item, scan)

    def remove_scan(self, item_id: str, scan_id: str) -> Scan:
        self._ensure_open()
        item = self.find_item(item_id)
        scan = item.find_scan(scan_id)
        item.scans = [s for s in item.scans if s.id != scan_id]
        return scan

    # --- State transitions ----------------------------------------------------

    def complete(self) -> None:
        """Transition to COMPLETED.

        The stock ledger must be updated in the same unit of work, before
        calling this.
        """
        if self.status == ReceivingStatus.COMPLETED:
            raise ConflictError(f"Receiving session {self.id} is already completed")
        if self.total_scanned <= 0:
            raise ConflictError(
                f"Receiving session {self.id} has no scanned units to commit"
            )
        self.status = ReceivingStatus.COMPLETED
        self.completed_at = datetime.now(timezone.utc)

    def ensure_deletable(self) -> None:
        if self.status == ReceivingStatus.COMPLETED:
            raise ConflictError(
                f"Receiving session {self.id} is completed and cannot be deleted"
            )

    # --- Computed properties --------------------------------------------------

    @property
    def total_expected(self) -> int:
        return sum(item.expected_quantity for item in self.items)

    @property
    def total_scanned(self) -> int:
        return sum(item.scanned_quantity for item in self.items)

    @property
    def progress_percent(self) -> int:
        """Display-only progress, clamped to [0, 100]."""
        if self.total_expected <= 0:
            return 100 if self.total_scanned > 0 else 0
        percent = round(self.total_scanned * 100 / self.total_expected)
        return max(0, min(100, percent))

    @property
    def is_completed(self) -> bool:
        return self.status == ReceivingStatus.COMPLETED

    def commit_lines(self) -> list[tuple[str, int]]:
        """(product_id, quantity) for every mapped line with a non-zero total."""
        return [
            (item.product_id, item.scanned_quantity)
            for item in self.items
            if item.product_id is not None and item.scanned_quantity != 0
        ]

    def unmapped_scanned_items(self) -> list[ReceivingItem]:
        return [
            item for item in self.items
            if item.product_id is None and item.scanned_quantity != 0
        ]

    def warnings(self) -> list[str]:
        """Operator warnings; these never block scanning or commit."""
        result: list[str] = []
        if self.items and self.total_scanned == 0:
            result.append("Nothing has been scanned yet")
        for item in self.items:
            if item.is_over_received:
                result.append(
                    f"Over-receipt on '{item.name}': scanned "
                    f"{item.scanned_quantity} of {item.expected_quantity} expected"
                )
        for item in self.unmapped_scanned_items():
            result.append(
                f"Line '{item.name}' is not mapped to a product and will not be stocked"
            )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _append(self, item: ReceivingItem, scan: Scan) -> Scan:
        item.scans.append(scan)
        if self.status == ReceivingStatus.DRAFT:
            self.status = ReceivingStatus.IN_PROGRESS
        return scan

    def _ensure_open(self) -> None:
        if self.status == ReceivingStatus.COMPLETED:
            raise ConflictError(
                f"Receiving session {self.id} is completed and can no longer change"
            )
