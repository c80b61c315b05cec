"""Central Enum definitions for reporting domain values.

These replace scattered string literals so routes, exports and services agree
on the rollup identifiers.
"""
from __future__ import annotations
import enum


class RollupType(str, enum.Enum):
    APP = "app"
    GENRE = "genre"
    CONTENT = "content"


__all__ = [
    "RollupType",
]
