"""Similarity scoring for lyricloop.

This module provides the scorer that estimates how likely it is that a
metadata-catalog track and a community-catalog video are the same
recording, as a 0-100 confidence.
"""

from dataclasses import dataclass

from lyricloop.config import MatchingSettings
from lyricloop.models.catalog import CommunityRecord, MetadataRecord
from lyricloop.utils.normalize import normalize_duration, normalize_text, round_half_up

__all__ = [
    "MatchBreakdown",
    "SimilarityScorer",
    "jaccard_score",
    "score_match",
]

Record = MetadataRecord | CommunityRecord


def jaccard_score(left: str, right: str) -> float:
    """Token-set Jaccard similarity of two normalized strings, as 0-100."""
    left_tokens = set(left.split())
    right_tokens = set(right.split())
    if not left_tokens or not right_tokens:
        return 0.0
    overlap = len(left_tokens & right_tokens)
    return 100.0 * overlap / len(left_tokens | right_tokens)


@dataclass(frozen=True)
class MatchBreakdown:
    """Component scores behind a confidence value."""

    title_score: float
    artist_score: float
    duration_score: float | None
    confidence: int
    exact_match: bool = False
    empty_title: bool = False


class SimilarityScorer:
    """Cross-catalog record similarity scorer.

    Combines three features of normalized records:
    - title: token-set overlap (dominant signal)
    - artist: token-set overlap, neutral when either side is empty
    - duration: full agreement within a small tolerance, decaying
      linearly to zero at the cutoff; ignored when unknown

    Exact normalized title AND artist equality short-circuits to 100.
    A record whose title normalizes to nothing is capped at a low
    ceiling, since an empty title signals bad data.

    Example:
        scorer = SimilarityScorer()
        confidence = scorer.score(metadata_record, community_record)
    """

    def __init__(self, settings: MatchingSettings | None = None) -> None:
        self._settings = settings or MatchingSettings()

    def score(self, a: Record, b: Record) -> int:
        """Score two records from different catalogs.

        Symmetric: score(a, b) == score(b, a).

        Returns:
            Confidence between 0 and 100
        """
        return self.breakdown(a, b).confidence

    def breakdown(self, a: Record, b: Record) -> MatchBreakdown:
        """Score two records and return the component scores."""
        s = self._settings

        title_a = normalize_text(a.title)
        title_b = normalize_text(b.title)
        artist_a = normalize_text(a.primary_artist)
        artist_b = normalize_text(b.primary_artist)

        title_score = jaccard_score(title_a, title_b)
        if artist_a and artist_b:
            artist_score = jaccard_score(artist_a, artist_b)
        else:
            artist_score = float(s.neutral_score)
        duration_score = self.duration_score(a.duration_seconds, b.duration_seconds)

        empty_title = not title_a or not title_b
        exact = not empty_title and title_a == title_b and artist_a == artist_b

        if exact:
            confidence = 100
        elif duration_score is None:
            known = s.title_weight + s.artist_weight
            confidence = round_half_up(
                (s.title_weight * title_score + s.artist_weight * artist_score) / known
            )
        else:
            confidence = round_half_up(
                s.title_weight * title_score
                + s.artist_weight * artist_score
                + s.duration_weight * duration_score
            )

        confidence = max(0, min(100, confidence))
        if empty_title:
            confidence = min(confidence, s.empty_title_ceiling)

        return MatchBreakdown(
            title_score=title_score,
            artist_score=artist_score,
            duration_score=duration_score,
            confidence=confidence,
            exact_match=exact,
            empty_title=empty_title,
        )

    def duration_score(self, seconds_a: int, seconds_b: int) -> float | None:
        """Duration agreement as 0-100, or None when either side is unknown."""
        duration_a = normalize_duration(seconds_a)
        duration_b = normalize_duration(seconds_b)
        if duration_a is None or duration_b is None:
            return None

        tolerance = self._settings.duration_tolerance_seconds
        cutoff = self._settings.duration_cutoff_seconds
        diff = abs(duration_a - duration_b)
        if diff <= tolerance:
            return 100.0
        if diff >= cutoff:
            return 0.0
        return 100.0 * (cutoff - diff) / (cutoff - tolerance)


_default_scorer: SimilarityScorer | None = None


def score_match(a: Record, b: Record) -> int:
    """Score two records with the default settings."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = SimilarityScorer()
    return _default_scorer.score(a, b)
