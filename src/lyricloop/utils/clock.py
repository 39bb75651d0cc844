"""Wall-clock time source for lyricloop."""

from datetime import UTC, datetime

__all__ = [
    "SystemClock",
]


class SystemClock:
    """Clock backed by the system time, always timezone-aware (UTC)."""

    def now(self) -> datetime:
        return datetime.now(UTC)
