"""StockItem aggregate — one row of the stock ledger.

Each (product, warehouse) pair owns exactly one StockItem that tracks the
on-hand quantity, the reserved part of it and a reorder threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wms.domain.exceptions import ValidationError
from wms.domain.model.value_objects import new_id


class StockLevel(Enum):
    OK = "OK"
    LOW = "LOW"
    OUT = "OUT"


@dataclass
class StockItem:
    """Aggregate root for fungible stock.

    ``quantity`` is not clamped at zero; audit corrections may take it
    below.  Callers enforce non-negative stock before they adjust.
    """

    id: str
    product_id: str
    warehouse_id: str
    quantity: int
    reserved: int = 0
    min_quantity: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def open(
        product_id: str,
        warehouse_id: str,
        quantity: int,
        min_quantity: int | None = None,
    ) -> StockItem:
        """Open a ledger row for a pair that has never held stock."""
        if not product_id or not warehouse_id:
            raise ValidationError("Product and warehouse are required")
        _check_int(quantity, "Quantity")
        min_quantity = 0 if min_quantity is None else min_quantity
        _check_non_negative(min_quantity, "Minimum quantity")
        return StockItem(
            id=new_id("STK"),
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            min_quantity=min_quantity,
        )

    # --- Mutations ------------------------------------------------------------

    def increase(self, quantity: int, min_quantity: int | None = None) -> None:
        """Accumulate received stock into an existing row.

        ``min_quantity`` replaces the threshold only when a different value
        is supplied.
        """
        _check_int(quantity, "Quantity")
        self.quantity += quantity
        if min_quantity is not None and min_quantity != self.min_quantity:
            _check_non_negative(min_quantity, "Minimum quantity")
            self.min_quantity = min_quantity

    def adjust(self, delta: int) -> None:
        """Apply a signed delta to the on-hand quantity."""
        _check_int(delta, "Adjustment")
        self.quantity += delta

    def update(
        self,
        min_quantity: int | None = None,
        reserved: int | None = None,
    ) -> None:
        """Overwrite the threshold and/or the reserved quantity."""
        if min_quantity is None and reserved is None:
            raise ValidationError("Nothing to update")
        if min_quantity is not None:
            _check_non_negative(min_quantity, "Minimum quantity")
            self.min_quantity = min_quantity
        if reserved is not None:
            _check_non_negative(reserved, "Reserved quantity")
            self.reserved = reserved

    # --- Computed properties --------------------------------------------------

    @property
    def available(self) -> int:
        return self.quantity - self.reserved

    @property
    def is_out(self) -> bool:
        return self.quantity == 0

    @property
    def is_low(self) -> bool:
        return self.available <= self.min_quantity

    @property
    def level(self) -> StockLevel:
        if self.is_out:
            return StockLevel.OUT
        if self.is_low:
            return StockLevel.LOW
        return StockLevel.OK

    def available_after(self, delta: int) -> int:
        return self.available + delta


def _check_int(value: object, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer")


def _check_non_negative(value: object, label: str) -> None:
    _check_int(value, label)
    if value < 0:  # type: ignore[operator]
        raise ValidationError(f"{label} cannot be negative")
