"""Warehouse and store directory entries (read-only to the core)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Warehouse:

    id: str
    name: str


@dataclass(frozen=True)
class Store:

    id: str
    name: str
    address: str | None = None
