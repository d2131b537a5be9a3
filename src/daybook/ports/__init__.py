"""Ports - interfaces/protocols for external dependencies."""

from .clock import Clock
from .entry_store import EntryStore, StorageUnavailable

__all__ = [
    "Clock",
    "EntryStore",
    "StorageUnavailable",
]
