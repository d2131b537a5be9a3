"""Adapters - I/O implementations of ports."""

from .clock import FixedClock, SystemClock
from .sqlite_store import SQLiteEntryStore

__all__ = [
    "FixedClock",
    "SystemClock",
    "SQLiteEntryStore",
]
