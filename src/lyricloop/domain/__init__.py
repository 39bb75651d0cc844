"""Domain logic for lyricloop.

This module exports the pure review-scheduling functions.
"""

from lyricloop.domain.scheduling import (
    MAX_QUALITY,
    MIN_QUALITY,
    initial_scheduling_state,
    next_easiness,
    schedule,
)

__all__ = [
    "MAX_QUALITY",
    "MIN_QUALITY",
    "initial_scheduling_state",
    "next_easiness",
    "schedule",
]
