"""Storage interface for lyricloop.

This module defines the Protocol for vocabulary persistence. lyricloop
never talks to a database itself; the host application supplies an
implementation (see lyricloop.infra.memory for an in-memory one).
"""

from datetime import datetime
from typing import ClassVar, Protocol, runtime_checkable

from lyricloop.models.vocabulary import SchedulingState, VocabularyItem

__all__ = [
    "VocabularyStorageInterface",
]


@runtime_checkable
class VocabularyStorageInterface(Protocol):
    """Contract for vocabulary persistence.

    Implementations are responsible for serializing concurrent writes
    to the same item (e.g. per-row transactions or version checks);
    lyricloop performs a plain read-modify-write on review submission.
    """

    config_class: ClassVar[type | None] = None

    async def get_vocabulary_item(self, item_id: str) -> VocabularyItem | None:
        """Get a vocabulary item by ID.

        Args:
            item_id: Item ID to retrieve

        Returns:
            VocabularyItem if found, None otherwise
        """
        ...

    async def save_vocabulary_item(self, item: VocabularyItem) -> str:
        """Save a vocabulary item (insert or replace).

        Args:
            item: Item to save

        Returns:
            Item ID
        """
        ...

    async def save_vocabulary_scheduling_state(
        self,
        item_id: str,
        state: SchedulingState,
    ) -> None:
        """Persist a new scheduling state for an item.

        Args:
            item_id: Item to update
            state: State computed by the scheduler
        """
        ...

    async def query_due_vocabulary(
        self,
        owner_id: str,
        now: datetime,
        limit: int,
    ) -> list[VocabularyItem]:
        """Get a learner's items whose next review time has passed.

        Args:
            owner_id: Learner ID
            now: Reference time
            limit: Maximum number of items

        Returns:
            Due items, ordered by next_review_at ascending
        """
        ...

    async def list_other_vocabulary(
        self,
        owner_id: str,
        language: str,
        exclude_id: str,
    ) -> list[VocabularyItem]:
        """Get a learner's other items in one language.

        Used as the distractor pool for multiple-choice questions.

        Args:
            owner_id: Learner ID
            language: Target language code
            exclude_id: Item to leave out (the question's own item)

        Returns:
            List of items
        """
        ...

    async def list_vocabulary(self, owner_id: str) -> list[VocabularyItem]:
        """Get all of a learner's items (for statistics).

        Args:
            owner_id: Learner ID

        Returns:
            List of items
        """
        ...
