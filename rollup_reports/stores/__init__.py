"""
Rollup store implementations (row + mapping table sources for the engine).
"""
from .base import RollupStore, RowSourceUnavailable
from .memory_store import InMemoryRollupStore
from .sql_store import SqlRollupStore

__all__ = ["RollupStore", "RowSourceUnavailable", "InMemoryRollupStore", "SqlRollupStore"]
