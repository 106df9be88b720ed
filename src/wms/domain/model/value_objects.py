"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from wms.domain.exceptions import ValidationError

BOX_PRESETS = (6, 10, 12, 20)
DEFAULT_BOX_MULTIPLIER = 10


def new_id(prefix: str) -> str:
    """Generate a short, prefixed identifier such as ``REC-1f3a9c2b``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _require_int(value: object, label: str) -> None:
    # bool is an int subclass; a True/False quantity is always a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{label} must be an integer, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class BoxMultiplier:
    """Units per carton applied to every scan while box mode is on."""

    value: int

    def __post_init__(self) -> None:
        _require_int(self.value, "Box multiplier")
        if self.value < 1:
            raise ValidationError("Box multiplier must be at least 1")

    def __str__(self) -> str:
        return f"x{self.value}"


@dataclass(frozen=True)
class ManualQuantity:
    """A signed quantity typed in by an operator.

    Positive values add units, negative values subtract them.  Zero is
    meaningless and rejected.
    """

    value: int

    def __post_init__(self) -> None:
        _require_int(self.value, "Manual quantity")
        if self.value == 0:
            raise ValidationError("Manual quantity cannot be zero")

    @staticmethod
    def parse(raw: str) -> ManualQuantity:
        try:
            value = int(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid manual quantity: {raw!r}") from exc
        return ManualQuantity(value)

    def __str__(self) -> str:
        return f"{self.value:+d}"
