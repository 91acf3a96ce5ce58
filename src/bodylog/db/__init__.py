"""Database layer for bodylog."""

from .engine import get_db_path, init_db
from .store import RecordStore

__all__ = [
    "get_db_path",
    "init_db",
    "RecordStore",
]
