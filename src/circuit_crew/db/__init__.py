"""Database layer for circuit-crew."""

from .engine import get_db_path, init_db
from .store import SQLiteStore, Store

__all__ = [
    "get_db_path",
    "init_db",
    "SQLiteStore",
    "Store",
]
