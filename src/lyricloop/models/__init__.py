"""Public DTO models for lyricloop.

This module exports all public data transfer objects.
"""

from lyricloop.models.catalog import (
    CatalogRecord,
    CatalogSource,
    CommunityRecord,
    MetadataRecord,
    UnifiedResult,
)
from lyricloop.models.session import (
    ExerciseType,
    ExerciseUnit,
    FillBlankExercise,
    MatchCard,
    MatchingExercise,
    QuizExercise,
    SentenceExercise,
    SessionMix,
)
from lyricloop.models.vocabulary import (
    QUALITY_LABELS,
    DifficultyBand,
    ReviewOutcome,
    SchedulingState,
    VocabularyItem,
    VocabularyStats,
)

__all__ = [
    "QUALITY_LABELS",
    "CatalogRecord",
    "CatalogSource",
    "CommunityRecord",
    "DifficultyBand",
    "ExerciseType",
    "ExerciseUnit",
    "FillBlankExercise",
    "MatchCard",
    "MatchingExercise",
    "MetadataRecord",
    "QuizExercise",
    "ReviewOutcome",
    "SchedulingState",
    "SentenceExercise",
    "SessionMix",
    "UnifiedResult",
    "VocabularyItem",
    "VocabularyStats",
]
