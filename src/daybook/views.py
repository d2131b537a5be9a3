"""Shared view layer between the web app and the CLI.

TemporalView turns the raw entry log into "today" and "history" as seen from
the local calendar. Every call re-scans the store; nothing is cached.
"""

from datetime import tzinfo
from pathlib import Path

from .adapters.clock import SystemClock
from .adapters.sqlite_store import SQLiteEntryStore
from .config import Config
from .core.entries import Entry, select_past, select_today
from .core.formatting import format_timestamp
from .ports.clock import Clock
from .ports.entry_store import EntryStore


def get_store(config: Config, clock: Clock | None = None) -> SQLiteEntryStore:
    """Build and initialize the entry store from config."""
    store = SQLiteEntryStore(Path(config.database_path).expanduser(), clock=clock)
    store.initialize()
    return store


class TemporalView:
    """Classifies stored entries relative to "now" in the local calendar."""

    def __init__(
        self,
        store: EntryStore,
        clock: Clock | None = None,
        tz: tzinfo | None = None,
        fallback_title: str = Config.fallback_title,
        fallback_text: str = Config.fallback_text,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.tz = tz
        self.fallback_title = fallback_title
        self.fallback_text = fallback_text

    @classmethod
    def from_config(cls, config: Config, store: EntryStore, clock: Clock | None = None) -> "TemporalView":
        return cls(
            store,
            clock=clock,
            tz=config.local_zone(),
            fallback_title=config.fallback_title,
            fallback_text=config.fallback_text,
        )

    def today_entry(self) -> Entry | None:
        """Latest entry on today's local date, or None."""
        return select_today(self.store.scan_all(), self.clock.now(), self.tz)

    def past_entries(self) -> list[Entry]:
        """One entry per earlier local date, newest first."""
        return select_past(self.store.scan_all(), self.clock.now(), self.tz)

    def format_entry(self, entry: Entry) -> dict:
        """Entry as a template/JSON dict with a human-readable time."""
        return {
            "title": entry.title,
            "time": format_timestamp(entry.timestamp, self.tz),
            "text": entry.text,
        }

    def index_context(self) -> dict:
        """
        View-model for the index page.

        With an entry for today: {title, time, text, entries}.
        Without one: {time, random_title, random_text, entries}, where time
        is "now" and the random_* fields are the configured placeholders.
        """
        entries = self.store.scan_all()
        now = self.clock.now()
        today = select_today(entries, now, self.tz)
        past = [self.format_entry(e) for e in select_past(entries, now, self.tz)]

        if today is not None:
            return {**self.format_entry(today), "entries": past}

        return {
            "time": format_timestamp(int(now.timestamp()), self.tz),
            "random_title": self.fallback_title,
            "random_text": self.fallback_text,
            "entries": past,
        }
