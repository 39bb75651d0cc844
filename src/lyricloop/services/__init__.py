"""Service layer for lyricloop.

This module exports the main service entry points.
"""

from lyricloop.services.matcher import CandidatePair, CrossCatalogMatcher, match
from lyricloop.services.review_service import (
    CORRECT_ANSWER_QUALITY,
    WRONG_ANSWER_QUALITY,
    ReviewService,
)
from lyricloop.services.session_builder import SessionBuilder
from lyricloop.services.similarity import (
    MatchBreakdown,
    SimilarityScorer,
    jaccard_score,
    score_match,
)

__all__ = [
    "CORRECT_ANSWER_QUALITY",
    "WRONG_ANSWER_QUALITY",
    "CandidatePair",
    "CrossCatalogMatcher",
    "MatchBreakdown",
    "ReviewService",
    "SessionBuilder",
    "SimilarityScorer",
    "jaccard_score",
    "match",
    "score_match",
]
