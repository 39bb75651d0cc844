"""Unit tests for lyricloop similarity scoring."""

import pytest

from lyricloop.config import MatchingSettings
from lyricloop.models.catalog import CommunityRecord, MetadataRecord
from lyricloop.services.similarity import SimilarityScorer, jaccard_score, score_match


def _meta(title: str, artist: str = "", duration: int = 0) -> MetadataRecord:
    return MetadataRecord(
        source_id="m", title=title, primary_artist=artist, duration_seconds=duration
    )


def _comm(title: str, channel: str = "", duration: int = 0) -> CommunityRecord:
    return CommunityRecord(
        source_id="c", title=title, primary_artist=channel, duration_seconds=duration
    )


class TestJaccardScore:
    """Tests for token-set overlap."""

    def test_identical(self) -> None:
        assert jaccard_score("luis fonsi", "luis fonsi") == 100.0

    def test_partial(self) -> None:
        assert jaccard_score("a b", "b c") == pytest.approx(100 / 3)

    def test_empty_side(self) -> None:
        assert jaccard_score("", "a") == 0.0
        assert jaccard_score("a", "") == 0.0


class TestSimilarityScorer:
    """Tests for SimilarityScorer."""

    def test_decorated_title_with_channel_artist(
        self,
        metadata_record: MetadataRecord,
        community_record: CommunityRecord,
    ) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        breakdown = scorer.breakdown(metadata_record, community_record)

        # title 100 after bracket stripping, artist 0, duration 1 s apart
        assert breakdown.title_score == 100.0
        assert breakdown.artist_score == 0.0
        assert breakdown.duration_score == 100.0
        assert breakdown.exact_match is False
        assert breakdown.confidence == 65
        assert 60 <= breakdown.confidence <= 85

    def test_exact_match_short_circuits(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        meta = _meta("Hello", "Adele", 295)
        comm = _comm("Hello (Official Music Video)", "Adele", 367)

        assert scorer.score(meta, comm) == 100

    def test_symmetric(
        self,
        metadata_record: MetadataRecord,
        community_record: CommunityRecord,
    ) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        assert scorer.score(metadata_record, community_record) == scorer.score(
            community_record, metadata_record
        )

    def test_unknown_duration_renormalizes_weights(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        breakdown = scorer.breakdown(_meta("Despacito", "Luis Fonsi", 0), _comm("Despacito", "x"))

        assert breakdown.duration_score is None
        # (0.5 * 100 + 0.35 * 0) / 0.85
        assert breakdown.confidence == 59

    def test_empty_artist_is_neutral(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        breakdown = scorer.breakdown(_meta("Despacito", "", 227), _comm("Despacito", "x", 227))

        assert breakdown.artist_score == 50.0
        # 50 + 0.35 * 50 + 15 = 82.5
        assert breakdown.confidence == 83

    def test_empty_title_is_capped(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        breakdown = scorer.breakdown(_meta("", "Adele", 200), _comm("(Official Video)", "Adele", 200))

        assert breakdown.empty_title is True
        assert breakdown.exact_match is False
        assert breakdown.confidence == 20

    def test_unrelated_records_score_low(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        score = scorer.score(_meta("Despacito", "Luis Fonsi", 227), _comm("Toxic", "Britney", 400))
        assert score == 0

    @pytest.mark.parametrize(
        ("seconds_a", "seconds_b", "expected"),
        [
            (200, 200, 100.0),
            (200, 203, 100.0),
            (200, 230, 0.0),
            (200, 290, 0.0),
            (200, 212, 100.0 * 18 / 27),
            (0, 200, None),
        ],
    )
    def test_duration_score(
        self,
        seconds_a: int,
        seconds_b: int,
        expected: float | None,
    ) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        result = scorer.duration_score(seconds_a, seconds_b)
        if expected is None:
            assert result is None
        else:
            assert result == pytest.approx(expected)

    def test_score_range(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        pairs = [
            (_meta("a b c", "x", 100), _comm("a b", "x", 101)),
            (_meta("", "", 0), _comm("", "", 0)),
            (_meta("Ünïcødé", "Bjørk", 10), _comm("unicode", "bjork", 9_999)),
        ]
        for meta, comm in pairs:
            assert 0 <= scorer.score(meta, comm) <= 100


    def test_title_opening_with_featuring_word(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        meta = _meta("Feat. Of Strength", "Band", 200)
        comm = _comm("Feat. Of Strength (Official Video)", "Band", 200)

        assert scorer.score(meta, comm) == 100

    def test_dashed_title_starting_with_version_word(self) -> None:
        scorer = SimilarityScorer(MatchingSettings())
        meta = _meta("Live and Let Die", "Guns N' Roses", 180)
        comm = _comm("Guns N' Roses - Live And Let Die", "Guns N' Roses", 180)
        breakdown = scorer.breakdown(meta, comm)

        # 4 of 7 title tokens shared, artist and duration agree
        assert breakdown.title_score == pytest.approx(400 / 7)
        assert breakdown.confidence == 79

class TestScoreMatch:
    """Tests for the module-level shortcut."""

    def test_matches_default_scorer(
        self,
        metadata_record: MetadataRecord,
        community_record: CommunityRecord,
    ) -> None:
        assert score_match(metadata_record, community_record) == SimilarityScorer().score(
            metadata_record, community_record
        )
