"""Vocabulary models for lyricloop.

These models represent the words a learner has saved and the
spaced-repetition state that decides when each word is reviewed.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "QUALITY_LABELS",
    "DifficultyBand",
    "ReviewOutcome",
    "SchedulingState",
    "VocabularyItem",
    "VocabularyStats",
]

# Presentation labels only; the numeric quality drives scheduling
QUALITY_LABELS: dict[int, str] = {
    0: "blackout",
    1: "again",
    2: "hard",
    3: "okay",
    4: "good",
    5: "perfect",
}


class DifficultyBand(StrEnum):
    """CEFR difficulty band (A1 easiest, C2 hardest)."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class SchedulingState(BaseModel, frozen=True):
    """Spaced-repetition state embedded in a vocabulary item.

    Attributes:
        easiness_factor: SM-2 multiplier, never below the configured floor
        repetition_count: Consecutive successful reviews (0 after a lapse)
        interval_days: Days between last_reviewed_at and next_review_at
        next_review_at: When the item becomes due
        last_reviewed_at: Last review time (None before the first review)
        total_reviews: All reviews ever submitted
        correct_reviews: Reviews with a passing quality
        memorization_score: 0-100 progress indicator shown to learners
        schema_version: Schema version for forward compatibility
    """

    easiness_factor: float = Field(default=2.5, gt=0.0)
    repetition_count: int = Field(default=0, ge=0)
    interval_days: int = Field(default=0, ge=0)
    next_review_at: datetime
    last_reviewed_at: datetime | None = None
    total_reviews: int = Field(default=0, ge=0)
    correct_reviews: int = Field(default=0, ge=0)
    memorization_score: int = Field(default=0, ge=0, le=100)
    schema_version: int = Field(default=1)

    def is_due(self, now: datetime) -> bool:
        """Check whether the item should be reviewed at `now`."""
        return self.next_review_at <= now


class VocabularyItem(BaseModel, frozen=True):
    """A word saved by a single learner.

    Attributes:
        id: Item ID
        owner_id: Learner who owns the item
        word: Word in the target language
        translation: Translation in the learner's language
        language: Target language code
        difficulty_band: CEFR band
        song_id: Song the word was saved from
        song_name: Title of that song
        context: Lyric line the word appeared in
        context_translation: Translation of the lyric line
        scheduling: Spaced-repetition state
    """

    id: str
    owner_id: str
    word: str
    translation: str
    language: str
    difficulty_band: DifficultyBand = DifficultyBand.A1
    song_id: str | None = None
    song_name: str | None = None
    context: str | None = None
    context_translation: str | None = None
    scheduling: SchedulingState
    schema_version: int = Field(default=1)

    def with_scheduling(self, scheduling: SchedulingState) -> "VocabularyItem":
        """Return a copy carrying a new scheduling state."""
        return self.model_copy(update={"scheduling": scheduling})


class ReviewOutcome(BaseModel, frozen=True):
    """How well the learner recalled an item (0 = forgot, 5 = easy)."""

    quality: int = Field(ge=0, le=5)

    @property
    def label(self) -> str:
        return QUALITY_LABELS[self.quality]


class VocabularyStats(BaseModel, frozen=True):
    """Aggregate review statistics for one learner.

    Attributes:
        total_words: Number of saved items
        due_count: Items due now
        mastered_count: Items with a memorization score at the mastery mark
        average_score: Mean memorization score, rounded
        streak: Consecutive days (ending today) with at least one review
    """

    total_words: int = 0
    due_count: int = 0
    mastered_count: int = 0
    average_score: int = 0
    streak: int = 0
