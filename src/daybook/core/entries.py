"""Pure entry domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable


class CorruptEntryError(RuntimeError):
    """Raised when a stored entry breaks the write contract (e.g. bad timestamp)."""


@dataclass(frozen=True)
class Entry:
    """A journal entry."""

    title: str
    text: str = ""
    timestamp: int | None = None

    def to_dict(self) -> dict:
        return {"title": self.title, "timestamp": self.timestamp, "text": self.text}


def _checked_timestamp(entry: Entry) -> int:
    ts = entry.timestamp
    # bool is an int subclass but never a valid timestamp
    if not isinstance(ts, int) or isinstance(ts, bool):
        raise CorruptEntryError(f"Entry {entry.title!r} has invalid timestamp: {ts!r}")
    return ts


def local_date(timestamp: int, tz: tzinfo | None = None) -> date:
    """
    Local calendar date of a Unix timestamp.

    tz=None means the host's local timezone.
    """
    if not isinstance(timestamp, int) or isinstance(timestamp, bool):
        raise CorruptEntryError(f"Invalid timestamp: {timestamp!r}")
    return datetime.fromtimestamp(timestamp, tz).date()


def today_in(now: datetime, tz: tzinfo | None = None) -> date:
    """Local calendar date of the reference instant."""
    return now.astimezone(tz).date()


def latest_per_day(entries: Iterable[Entry], tz: tzinfo | None = None) -> dict[date, Entry]:
    """
    Group entries by local calendar date, keeping the latest of each day.

    Pure function - no I/O.
    """
    latest: dict[date, Entry] = {}
    for entry in entries:
        ts = _checked_timestamp(entry)
        day = local_date(ts, tz)
        current = latest.get(day)
        if current is None or ts > current.timestamp:
            latest[day] = entry
    return latest


def select_today(
    entries: Iterable[Entry],
    now: datetime,
    tz: tzinfo | None = None,
) -> Entry | None:
    """
    Today's entry: the latest entry on the local calendar date of `now`.

    Returns None when nothing was written today.
    """
    return latest_per_day(entries, tz).get(today_in(now, tz))


def select_past(
    entries: Iterable[Entry],
    now: datetime,
    tz: tzinfo | None = None,
) -> list[Entry]:
    """
    One entry per local calendar day strictly before today, newest first.

    Later entries on the same day win over earlier ones; the others are
    left out of the result but stay in storage.

    Pure function - no I/O.
    """
    today = today_in(now, tz)
    past = [entry for day, entry in latest_per_day(entries, tz).items() if day < today]
    return sorted(past, key=lambda e: e.timestamp, reverse=True)
