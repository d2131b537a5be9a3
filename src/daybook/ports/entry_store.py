"""Entry storage interface."""

from typing import Protocol

from daybook.core.entries import Entry


class StorageUnavailable(RuntimeError):
    """The storage medium cannot be opened, read or written."""


class EntryStore(Protocol):
    """Interface for the append-only entry log."""

    def initialize(self) -> None:
        """Create storage if missing. Never touches existing entries."""
        ...

    def insert(self, entry: Entry) -> Entry:
        """Append an entry, assigning the current time if it has no timestamp."""
        ...

    def scan_all(self) -> list[Entry]:
        """Return every stored entry, in no particular order."""
        ...
