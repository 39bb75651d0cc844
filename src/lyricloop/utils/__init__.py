"""Utility functions for lyricloop.

This module contains internal utility functions.
"""

from lyricloop.utils.clock import SystemClock
from lyricloop.utils.normalize import (
    UNKNOWN_DURATION,
    answer_key,
    normalize_duration,
    normalize_text,
    round_half_up,
    tokenize,
)

__all__ = [
    "UNKNOWN_DURATION",
    "SystemClock",
    "answer_key",
    "normalize_duration",
    "normalize_text",
    "round_half_up",
    "tokenize",
]
