"""SQLite-backed entry storage adapter."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import Column, Integer, MetaData, Table, Text, create_engine, insert, inspect, select
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.schema import CreateTable

from daybook.core.entries import Entry
from daybook.ports.clock import Clock
from daybook.ports.entry_store import StorageUnavailable

from .clock import SystemClock

logger = logging.getLogger(__name__)

metadata = MetaData()

entries_table = Table(
    "entries",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", Text, nullable=False),
    Column("timestamp", Integer, nullable=False),
    Column("text", Text, nullable=False),
    sqlite_autoincrement=True,
)


class SQLiteEntryStore:
    """
    SQLite entry storage.

    Implements EntryStore protocol. One append-only `entries` table; the row
    id never leaves this class. Concurrent writers are serialized by SQLite's
    own locking.
    """

    def __init__(self, db_path: Path | str, clock: Clock | None = None):
        self.db_path = Path(db_path).expanduser()
        self.clock = clock or SystemClock()
        self.engine = create_engine(f"sqlite:///{self.db_path}")

    def initialize(self) -> None:
        """
        Create the database file and entries table if missing.

        Safe to call repeatedly and from several processes at once: only the
        caller whose CREATE TABLE wins logs the creation.
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            created = self._create_table()
        except (DBAPIError, OSError) as e:
            logger.error(f"Could not initialize journal database at {self.db_path}: {e}")
            raise StorageUnavailable(f"Cannot initialize {self.db_path}: {e}") from e

        if created:
            logger.info(f"Created journal database at {self.db_path}")

    def _create_table(self) -> bool:
        """Create the entries table. Returns False if it already existed."""
        with self.engine.connect() as conn:
            if inspect(conn).has_table(entries_table.name):
                return False

        try:
            with self.engine.begin() as conn:
                conn.execute(CreateTable(entries_table))
        except OperationalError as e:
            # Lost the race to a concurrent initialize
            if "already exists" in str(e.orig):
                return False
            raise
        return True

    @staticmethod
    def _check_timestamp(timestamp) -> None:
        """Reject timestamps that can't be rendered as a calendar date."""
        if not isinstance(timestamp, int) or isinstance(timestamp, bool):
            raise ValueError(f"Entry timestamp must be an integer, got {timestamp!r}")
        try:
            year = datetime.fromtimestamp(timestamp, timezone.utc).year
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Entry timestamp {timestamp} is out of range") from e
        # years 1 and 9999 can overflow once shifted into a local zone
        if not datetime.min.year < year < datetime.max.year:
            raise ValueError(f"Entry timestamp {timestamp} is out of range")

    def insert(self, entry: Entry) -> Entry:
        """Append an entry. Returns it as stored, with its timestamp set."""
        if not entry.title or not entry.title.strip():
            raise ValueError("Entry title must not be empty")

        if entry.timestamp is None:
            entry = replace(entry, timestamp=int(self.clock.now().timestamp()))
        self._check_timestamp(entry.timestamp)
        if entry.text is None:
            entry = replace(entry, text="")

        try:
            with self.engine.begin() as conn:
                conn.execute(
                    insert(entries_table).values(
                        title=entry.title,
                        timestamp=entry.timestamp,
                        text=entry.text,
                    )
                )
        except DBAPIError as e:
            logger.error(f"Failed to write entry to {self.db_path}: {e}")
            raise StorageUnavailable(f"Cannot write to {self.db_path}: {e}") from e

        return entry

    def scan_all(self) -> list[Entry]:
        """Return every stored entry, in no particular order."""
        query = select(
            entries_table.c.title,
            entries_table.c.timestamp,
            entries_table.c.text,
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).all()
        except DBAPIError as e:
            logger.error(f"Failed to read entries from {self.db_path}: {e}")
            raise StorageUnavailable(f"Cannot read {self.db_path}: {e}") from e

        return [Entry(title=row.title, text=row.text, timestamp=row.timestamp) for row in rows]
