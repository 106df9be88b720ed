"""Product — a catalog entry.

The catalog is owned by an external system; the reconciliation core only
reads it to resolve ids and SKUs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:

    id: str
    name: str
    sku: str
    category: str | None = None

    def matches_sku(self, sku: str) -> bool:
        return self.sku.strip().lower() == sku.strip().lower()
