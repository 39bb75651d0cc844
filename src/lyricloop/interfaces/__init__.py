"""Interface contracts for lyricloop.

This module exports all Protocol-based interfaces for dependency injection.
"""

from lyricloop.interfaces.clock import ClockInterface
from lyricloop.interfaces.storage import VocabularyStorageInterface

__all__ = [
    "ClockInterface",
    "VocabularyStorageInterface",
]
