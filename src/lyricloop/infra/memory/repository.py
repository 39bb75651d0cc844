"""In-memory vocabulary repository for lyricloop.

This module provides a dict-backed implementation of
VocabularyStorageInterface, for tests and for applications that keep
vocabulary in process.
"""

import asyncio
from datetime import datetime
from typing import Any, Self

from lyricloop.interfaces.storage import VocabularyStorageInterface
from lyricloop.logging import get_logger
from lyricloop.models.vocabulary import SchedulingState, VocabularyItem

__all__ = [
    "InMemoryVocabularyRepository",
]

logger = get_logger(__name__)


class InMemoryVocabularyRepository(VocabularyStorageInterface):
    """Dict-backed implementation of VocabularyStorageInterface.

    Writes are serialized with an asyncio lock, so concurrent reviews
    of the same item never interleave a read-modify-write.
    """

    config_class = None

    def __init__(self, items: list[VocabularyItem] | None = None) -> None:
        self._items: dict[str, VocabularyItem] = {item.id: item for item in items or []}
        self._lock = asyncio.Lock()

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for LyricLoop instantiation.

        Args:
            config: Optional "items" key with VocabularyItem objects or dicts

        Returns:
            Repository instance
        """
        items = [
            item if isinstance(item, VocabularyItem) else VocabularyItem.model_validate(item)
            for item in config.get("items", [])
        ]
        logger.debug("memory_repository_created", item_count=len(items))
        return cls(items)

    async def close(self) -> None:
        """Release resources (nothing to release)."""

    async def get_vocabulary_item(self, item_id: str) -> VocabularyItem | None:
        return self._items.get(item_id)

    async def save_vocabulary_item(self, item: VocabularyItem) -> str:
        async with self._lock:
            self._items[item.id] = item
        return item.id

    async def save_vocabulary_scheduling_state(
        self,
        item_id: str,
        state: SchedulingState,
    ) -> None:
        async with self._lock:
            item = self._items.get(item_id)
            if item is None:
                raise KeyError(f"Vocabulary item not found: {item_id}")
            self._items[item_id] = item.with_scheduling(state)

    async def query_due_vocabulary(
        self,
        owner_id: str,
        now: datetime,
        limit: int,
    ) -> list[VocabularyItem]:
        due = sorted(
            (
                item
                for item in self._items.values()
                if item.owner_id == owner_id and item.scheduling.is_due(now)
            ),
            key=lambda item: (item.scheduling.next_review_at, item.id),
        )
        return due[: max(0, limit)]

    async def list_other_vocabulary(
        self,
        owner_id: str,
        language: str,
        exclude_id: str,
    ) -> list[VocabularyItem]:
        return [
            item
            for item in self._items.values()
            if item.owner_id == owner_id and item.language == language and item.id != exclude_id
        ]

    async def list_vocabulary(self, owner_id: str) -> list[VocabularyItem]:
        return [item for item in self._items.values() if item.owner_id == owner_id]
