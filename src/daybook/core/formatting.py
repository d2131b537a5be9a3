"""Human-readable rendering of entry timestamps."""

from datetime import datetime, tzinfo


def format_timestamp(timestamp: int, tz: tzinfo | None = None) -> str:
    """
    Render a Unix timestamp as e.g. "Thu d. 18. January 2024".

    Uses local time (tz=None means the host's zone) and the process locale
    for weekday and month names.
    """
    dt = datetime.fromtimestamp(timestamp, tz)
    return f"{dt.strftime('%a')} d. {dt.day}. {dt.strftime('%B')} {dt.year}"
