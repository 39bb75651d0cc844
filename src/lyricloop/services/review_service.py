"""Review service for lyricloop.

This module provides the service that selects due vocabulary, applies
review outcomes through the scheduler and reports review statistics.
"""

from datetime import datetime, timedelta

from lyricloop.config import SchedulerSettings, SessionSettings
from lyricloop.domain.scheduling import schedule
from lyricloop.interfaces.clock import ClockInterface
from lyricloop.interfaces.storage import VocabularyStorageInterface
from lyricloop.logging import get_logger
from lyricloop.models.vocabulary import VocabularyItem, VocabularyStats
from lyricloop.utils.clock import SystemClock
from lyricloop.utils.normalize import answer_key, round_half_up

__all__ = [
    "CORRECT_ANSWER_QUALITY",
    "WRONG_ANSWER_QUALITY",
    "ReviewService",
]

logger = get_logger(__name__)

CORRECT_ANSWER_QUALITY = 4  # "good"
WRONG_ANSWER_QUALITY = 1  # "again"


class ReviewService:
    """Spaced-repetition review service.

    Wraps the pure scheduler with storage access:
    - get_due_items: items whose next review time has passed, most overdue first
    - submit_review: read item, schedule, persist new state
    - submit_answer: grade a multiple-choice answer, then submit_review
    - get_stats: totals, due count, mastery and review streak

    The caller must serialize concurrent reviews of the same item.

    Example:
        service = ReviewService(storage)
        due = await service.get_due_items(owner_id, limit=10)
        item = await service.submit_review(due[0].id, quality=4)
    """

    def __init__(
        self,
        storage: VocabularyStorageInterface,
        clock: ClockInterface | None = None,
        scheduler_settings: SchedulerSettings | None = None,
        session_settings: SessionSettings | None = None,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            storage: Storage interface for vocabulary items
            clock: Time source (system clock when omitted)
            scheduler_settings: Scheduler settings
            session_settings: Session settings (due limit, mastery mark)
        """
        self._storage = storage
        self._clock = clock or SystemClock()
        self._scheduler_settings = scheduler_settings or SchedulerSettings()
        self._session_settings = session_settings or SessionSettings()

    async def get_due_items(
        self,
        owner_id: str,
        now: datetime | None = None,
        limit: int | None = None,
    ) -> list[VocabularyItem]:
        """Get a learner's due items, most overdue first.

        The store's answer is re-filtered and re-sorted so the result is
        ordered by next_review_at ascending (ties by id) whatever the
        storage backend returns.

        Args:
            owner_id: Learner ID
            now: Reference time (clock time when omitted)
            limit: Maximum number of items (settings default when omitted)

        Returns:
            Due items; empty when the learner is caught up
        """
        now = now or self._clock.now()
        limit = self._session_settings.due_limit if limit is None else limit
        if limit <= 0:
            return []

        items = await self._storage.query_due_vocabulary(owner_id, now, limit)
        due = sorted(
            (item for item in items if item.owner_id == owner_id and item.scheduling.is_due(now)),
            key=lambda item: (item.scheduling.next_review_at, item.id),
        )
        return due[:limit]

    async def submit_review(
        self,
        item_id: str,
        quality: int,
        now: datetime | None = None,
    ) -> VocabularyItem:
        """Apply a review outcome to an item and persist it.

        Args:
            item_id: Item that was reviewed
            quality: Review quality in [0, 5]
            now: Review time (clock time when omitted)

        Returns:
            The item with its new scheduling state

        Raises:
            KeyError: If the item does not exist
            ValueError: If quality is out of range
        """
        item = await self._storage.get_vocabulary_item(item_id)
        if item is None:
            raise KeyError(f"Vocabulary item not found: {item_id}")

        now = now or self._clock.now()
        state = schedule(item.scheduling, quality, now, settings=self._scheduler_settings)
        await self._storage.save_vocabulary_scheduling_state(item_id, state)

        logger.debug(
            "review_submitted",
            item_id=item_id,
            quality=quality,
            repetition_count=state.repetition_count,
            interval_days=state.interval_days,
            easiness_factor=state.easiness_factor,
        )
        return item.with_scheduling(state)

    async def submit_answer(
        self,
        item_id: str,
        answer: str,
        now: datetime | None = None,
    ) -> tuple[VocabularyItem, bool]:
        """Grade a multiple-choice answer and submit the review.

        A correct answer counts as quality 4 ("good"), a wrong one as
        quality 1 ("again"). Comparison ignores case, accents and
        punctuation.

        Returns:
            (updated item, whether the answer was correct)
        """
        item = await self._storage.get_vocabulary_item(item_id)
        if item is None:
            raise KeyError(f"Vocabulary item not found: {item_id}")

        correct = answer_key(answer) == answer_key(item.translation)
        quality = CORRECT_ANSWER_QUALITY if correct else WRONG_ANSWER_QUALITY
        updated = await self.submit_review(item_id, quality, now)
        return updated, correct

    async def get_stats(self, owner_id: str, now: datetime | None = None) -> VocabularyStats:
        """Compute review statistics for a learner.

        Args:
            owner_id: Learner ID
            now: Reference time (clock time when omitted)

        Returns:
            VocabularyStats
        """
        now = now or self._clock.now()
        items = await self._storage.list_vocabulary(owner_id)
        if not items:
            return VocabularyStats()

        scores = [item.scheduling.memorization_score for item in items]
        return VocabularyStats(
            total_words=len(items),
            due_count=sum(1 for item in items if item.scheduling.is_due(now)),
            mastered_count=sum(1 for s in scores if s >= self._session_settings.mastered_score),
            average_score=round_half_up(sum(scores) / len(scores)),
            streak=_review_streak(items, now),
        )


def _review_streak(items: list[VocabularyItem], now: datetime) -> int:
    """Count consecutive calendar days, ending today, with a review."""
    tz = now.tzinfo
    review_days = {
        (reviewed.astimezone(tz) if tz else reviewed).date()
        for item in items
        if (reviewed := item.scheduling.last_reviewed_at) is not None
    }

    streak = 0
    day = now.date()
    while day in review_days:
        streak += 1
        day -= timedelta(days=1)
    return streak
