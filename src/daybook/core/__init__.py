"""Functional core - pure business logic with no I/O."""

from .entries import (
    CorruptEntryError,
    Entry,
    latest_per_day,
    local_date,
    select_past,
    select_today,
    today_in,
)
from .formatting import format_timestamp

__all__ = [
    # Entries
    "CorruptEntryError",
    "Entry",
    "latest_per_day",
    "local_date",
    "select_past",
    "select_today",
    "today_in",
    # Formatting
    "format_timestamp",
]
