"""Cross-catalog matching service for lyricloop.

This module reconciles search results from the metadata catalog and the
community catalog into a single ranked, deduplicated list of
UnifiedResults.
"""

from dataclasses import dataclass
from typing import TypeVar

from lyricloop.config import MatchingSettings
from lyricloop.logging import get_logger
from lyricloop.models.catalog import (
    CatalogSource,
    CommunityRecord,
    MetadataRecord,
    UnifiedResult,
)
from lyricloop.services.similarity import SimilarityScorer

__all__ = [
    "CandidatePair",
    "CrossCatalogMatcher",
    "match",
]

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", MetadataRecord, CommunityRecord)


@dataclass(frozen=True, order=True)
class CandidatePair:
    """A scored (metadata, community) pairing.

    Ordering sorts best-first: score descending, then metadata position,
    then community position.
    """

    sort_key: tuple[int, int, int]
    metadata_index: int
    community_index: int
    score: int

    @classmethod
    def create(cls, metadata_index: int, community_index: int, score: int) -> "CandidatePair":
        return cls(
            sort_key=(-score, metadata_index, community_index),
            metadata_index=metadata_index,
            community_index=community_index,
            score=score,
        )


class CrossCatalogMatcher:
    """Greedy cross-catalog matcher.

    Algorithm:
    1. Score every metadata x community pair
    2. Sort pairs best-first (ties: earlier metadata, then earlier community)
    3. Accept pairs at or above the threshold whose records are both unused
    4. Unused metadata records become metadata-only results (confidence 100)
    5. Unused community records are dropped unless include_community_only
    6. Order: matched pairs by confidence, then metadata-only in input order

    Greedy assignment is not globally optimal but is simple and
    deterministic: identical inputs always give identical output.

    Example:
        matcher = CrossCatalogMatcher()
        results = matcher.match(metadata_records, community_records)
    """

    def __init__(
        self,
        settings: MatchingSettings | None = None,
        scorer: SimilarityScorer | None = None,
    ) -> None:
        """Initialize matcher.

        Args:
            settings: Matching settings (threshold, community-only policy)
            scorer: Similarity scorer (built from settings when omitted)
        """
        self._settings = settings or MatchingSettings()
        self._scorer = scorer or SimilarityScorer(self._settings)

    @property
    def threshold(self) -> int:
        """Minimum score for a pairing to be accepted."""
        return self._settings.acceptance_threshold

    def match(
        self,
        metadata_records: list[MetadataRecord],
        community_records: list[CommunityRecord],
    ) -> list[UnifiedResult]:
        """Match two catalogs' records into unified results.

        Either list may be empty (e.g. when one catalog's search failed).

        Args:
            metadata_records: Metadata catalog records, in relevance order
            community_records: Community catalog records, in relevance order

        Returns:
            Ranked, deduplicated UnifiedResults
        """
        metadata = _unique_by_source_id(metadata_records)
        community = _unique_by_source_id(community_records)

        candidates = self.score_pairs(metadata, community)

        used_metadata: set[int] = set()
        used_community: set[int] = set()
        accepted: list[CandidatePair] = []
        for pair in candidates:
            if pair.score < self.threshold:
                break
            if pair.metadata_index in used_metadata or pair.community_index in used_community:
                continue
            used_metadata.add(pair.metadata_index)
            used_community.add(pair.community_index)
            accepted.append(pair)

        accepted.sort(key=lambda p: (-p.score, p.metadata_index))
        results = [
            _matched_result(metadata[p.metadata_index], community[p.community_index], p.score)
            for p in accepted
        ]
        results.extend(
            _metadata_only_result(record)
            for i, record in enumerate(metadata)
            if i not in used_metadata
        )

        community_only = 0
        if self._settings.include_community_only:
            best_scores = _best_score_by_community(candidates)
            for i, record in enumerate(community):
                if i in used_community:
                    continue
                results.append(_community_only_result(record, best_scores.get(i, 0)))
                community_only += 1

        logger.debug(
            "catalogs_matched",
            metadata_count=len(metadata),
            community_count=len(community),
            matched_pairs=len(accepted),
            metadata_only=len(metadata) - len(accepted),
            community_only=community_only,
        )
        return results

    def score_pairs(
        self,
        metadata: list[MetadataRecord],
        community: list[CommunityRecord],
    ) -> list[CandidatePair]:
        """Score the full pairwise matrix, sorted best-first."""
        pairs = [
            CandidatePair.create(i, j, self._scorer.score(meta, comm))
            for i, meta in enumerate(metadata)
            for j, comm in enumerate(community)
        ]
        pairs.sort()
        return pairs


def _unique_by_source_id(records: list[RecordT]) -> list[RecordT]:
    seen: set[str] = set()
    unique: list[RecordT] = []
    for record in records:
        if record.source_id in seen:
            logger.debug("duplicate_record_skipped", source=record.source, source_id=record.source_id)
            continue
        seen.add(record.source_id)
        unique.append(record)
    return unique


def _best_score_by_community(candidates: list[CandidatePair]) -> dict[int, int]:
    best: dict[int, int] = {}
    for pair in candidates:
        # candidates are sorted best-first
        best.setdefault(pair.community_index, pair.score)
    return best


def _matched_result(meta: MetadataRecord, comm: CommunityRecord, score: int) -> UnifiedResult:
    return UnifiedResult(
        title=meta.title,
        artist=meta.primary_artist,
        metadata_source_id=meta.source_id,
        community_source_id=comm.source_id,
        confidence=score,
        primary_source=CatalogSource.METADATA,
        album=meta.album,
        duration_seconds=meta.duration_seconds,
        cover_image_url=meta.cover_image_url,
        thumbnail_url=comm.cover_image_url,
        channel=comm.primary_artist,
        views=comm.views,
    )


def _metadata_only_result(meta: MetadataRecord) -> UnifiedResult:
    return UnifiedResult(
        title=meta.title,
        artist=meta.primary_artist,
        metadata_source_id=meta.source_id,
        confidence=100,
        primary_source=CatalogSource.METADATA,
        album=meta.album,
        duration_seconds=meta.duration_seconds,
        cover_image_url=meta.cover_image_url,
    )


def _community_only_result(comm: CommunityRecord, score: int) -> UnifiedResult:
    return UnifiedResult(
        title=comm.title,
        artist=comm.primary_artist,
        community_source_id=comm.source_id,
        confidence=score,
        primary_source=CatalogSource.COMMUNITY,
        duration_seconds=comm.duration_seconds,
        thumbnail_url=comm.cover_image_url,
        channel=comm.primary_artist,
        views=comm.views,
    )


def match(
    metadata_records: list[MetadataRecord],
    community_records: list[CommunityRecord],
) -> list[UnifiedResult]:
    """Match records with the default settings."""
    return CrossCatalogMatcher().match(metadata_records, community_records)
