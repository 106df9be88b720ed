"""Scan input modes for receiving.

``ScanMode`` is the immutable configuration handed to every scan-handling
call.  ``ScanModeSelector`` is the operator-side state that produces it:
box mode only takes effect after the multiplier has been confirmed, and
cancelling the configuration leaves the previous mode untouched.

One selector belongs to one operator working one session, so concurrent
sessions never share scan configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ConflictError
from wms.domain.model.value_objects import (
    BOX_PRESETS,
    DEFAULT_BOX_MULTIPLIER,
    BoxMultiplier,
)

BOX_CODE_PREFIX = "BOX:"


@dataclass(frozen=True)
class ScanMode:

    box: BoxMultiplier | None = None

    @staticmethod
    def single() -> ScanMode:
        return ScanMode()

    @staticmethod
    def boxed(multiplier: int) -> ScanMode:
        return ScanMode(box=BoxMultiplier(multiplier))

    @property
    def is_box(self) -> bool:
        return self.box is not None

    @property
    def quantity_per_scan(self) -> int:
        return self.box.value if self.box is not None else 1

    def tag(self, code: str) -> str:
        """The code as it is written to the scan log."""
        return f"{BOX_CODE_PREFIX} {code}" if self.is_box else code

    def __str__(self) -> str:
        return f"box {self.box}" if self.box is not None else "single"


class ScanModeSelector:

    def __init__(
        self,
        presets: tuple[int, ...] = BOX_PRESETS,
        default_multiplier: int = DEFAULT_BOX_MULTIPLIER,
    ) -> None:
        self.presets = tuple(presets)
        self._mode = ScanMode.single()
        self._last_multiplier = BoxMultiplier(default_multiplier).value
        self._pending: int | None = None

    @property
    def mode(self) -> ScanMode:
        return self._mode

    @property
    def is_configuring(self) -> bool:
        return self._pending is not None

    @property
    def pending_multiplier(self) -> int | None:
        return self._pending

    def begin_box_configuration(self) -> int:
        """Open the multiplier dialog, pre-filled with the last used value."""
        self._pending = self._last_multiplier
        return self._pending

    def propose(self, multiplier: int) -> None:
        if self._pending is None:
            raise ConflictError("Box mode configuration is not open")
        self._pending = multiplier

    def confirm(self) -> ScanMode:
        """Validate the pending multiplier and switch box mode on."""
        if self._pending is None:
            raise ConflictError("Box mode configuration is not open")
        mode = ScanMode.boxed(self._pending)  # raises ValidationError if < 1
        self._mode = mode
        self._last_multiplier = mode.quantity_per_scan
        self._pending = None
        return mode

    def cancel(self) -> ScanMode:
        self._pending = None
        return self._mode

    def disable_box_mode(self) -> ScanMode:
        self._pending = None
        self._mode = ScanMode.single()
        return self._mode
