"""Review session models for lyricloop.

A review session is a list of exercise units built from the learner's
due vocabulary. Each unit type carries everything a client needs to
render it, so sessions can be generated up front.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

__all__ = [
    "ExerciseType",
    "ExerciseUnit",
    "FillBlankExercise",
    "MatchCard",
    "MatchingExercise",
    "QuizExercise",
    "SentenceExercise",
    "SessionMix",
]


class ExerciseType(StrEnum):
    """Kinds of exercise units."""

    QUIZ = "quiz"
    MATCHING = "matching"
    SENTENCE = "sentence"
    FILL_BLANK = "fill_blank"


class SessionMix(StrEnum):
    """Requested composition of a review session."""

    QUIZ = "quiz"
    """Multiple-choice questions only (one per due item)"""

    MATCHING = "matching"
    SENTENCE = "sentence"
    FILL_BLANK = "fill_blank"

    MIXED = "mixed"
    """Blend of all exercise types in fixed proportions"""


class _BaseExercise(BaseModel, frozen=True):
    id: str = Field(description="Unit ID, unique within the session")
    item_ids: list[str] = Field(description="Vocabulary items exercised by this unit")


class QuizExercise(_BaseExercise, frozen=True):
    """Multiple-choice translation question."""

    type: Literal[ExerciseType.QUIZ] = ExerciseType.QUIZ
    word: str
    correct_answer: str
    options: list[str]
    song_name: str | None = None


class MatchCard(BaseModel, frozen=True):
    """One card in a matching column."""

    card_id: str
    text: str
    item_id: str


class MatchingExercise(_BaseExercise, frozen=True):
    """Pair words with their translations."""

    type: Literal[ExerciseType.MATCHING] = ExerciseType.MATCHING
    left_column: list[MatchCard]
    right_column: list[MatchCard]


class SentenceExercise(_BaseExercise, frozen=True):
    """Rebuild a lyric line from its scrambled words."""

    type: Literal[ExerciseType.SENTENCE] = ExerciseType.SENTENCE
    sentence: str
    translation: str | None = None
    correct_words: list[str]
    scrambled_words: list[str]


class FillBlankExercise(_BaseExercise, frozen=True):
    """Fill blanked words of a lyric line from a word bank.

    Attributes:
        words: The lyric line split on whitespace
        blank_positions: Indexes into `words` that are hidden, ascending
        answers: Hidden words, in blank_positions order
        word_bank: Answers plus distractor words, shuffled
        translation: Translation of the whole line
    """

    type: Literal[ExerciseType.FILL_BLANK] = ExerciseType.FILL_BLANK
    words: list[str]
    blank_positions: list[int]
    answers: list[str]
    word_bank: list[str]
    translation: str | None = None
    song_name: str | None = None


ExerciseUnit = Annotated[
    QuizExercise | MatchingExercise | SentenceExercise | FillBlankExercise,
    Field(discriminator="type"),
]
