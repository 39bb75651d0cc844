"""In-memory storage for lyricloop."""

from lyricloop.infra.memory.repository import InMemoryVocabularyRepository

__all__ = [
    "InMemoryVocabularyRepository",
]
