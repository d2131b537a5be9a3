"""Time source interface."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Interface for reading the current instant."""

    def now(self) -> datetime:
        """Current instant as a timezone-aware datetime."""
        ...
