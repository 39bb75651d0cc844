"""Clock interface for lyricloop.

Time is injected rather than read globally so that scheduling and
due-set selection can be tested with fixed timestamps.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

__all__ = [
    "ClockInterface",
]


@runtime_checkable
class ClockInterface(Protocol):
    """Contract for time sources."""

    def now(self) -> datetime:
        """Return the current time (timezone-aware)."""
        ...
