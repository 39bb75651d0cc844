"""Unit tests for lyricloop review scheduling."""

from datetime import datetime, timedelta

import pytest

from lyricloop.config import SchedulerSettings
from lyricloop.domain.scheduling import initial_scheduling_state, next_easiness, schedule
from lyricloop.models.vocabulary import SchedulingState


class TestNextEasiness:
    """Tests for the easiness factor update."""

    @pytest.mark.parametrize(
        ("quality", "expected"),
        [(5, 2.6), (4, 2.5), (3, 2.36), (2, 2.18), (1, 1.96), (0, 1.7)],
    )
    def test_update_from_default(self, quality: int, expected: float) -> None:
        assert next_easiness(2.5, quality) == pytest.approx(expected)

    def test_floor(self) -> None:
        assert next_easiness(1.3, 0) == 1.3
        assert next_easiness(1.4, 1) == 1.3


class TestSchedule:
    """Tests for schedule()."""

    def test_first_success(self, now: datetime) -> None:
        state = initial_scheduling_state(now)

        result = schedule(state, 4, now)

        assert result.repetition_count == 1
        assert result.interval_days == 1
        assert result.next_review_at == now + timedelta(days=1)
        assert result.last_reviewed_at == now
        assert result.easiness_factor == pytest.approx(2.5)

    def test_second_success(self, now: datetime) -> None:
        day1 = now + timedelta(days=1)
        state = SchedulingState(
            easiness_factor=2.5, repetition_count=1, interval_days=1, next_review_at=day1
        )

        result = schedule(state, 4, day1)

        assert result.repetition_count == 2
        assert result.interval_days == 6
        assert result.next_review_at == now + timedelta(days=7)

    def test_lapse_resets_progress(self, now: datetime) -> None:
        day7 = now + timedelta(days=7)
        state = SchedulingState(
            easiness_factor=2.5, repetition_count=2, interval_days=6, next_review_at=day7
        )

        result = schedule(state, 1, day7)

        assert result.repetition_count == 0
        assert result.interval_days == 1
        assert 1.3 <= result.easiness_factor < 2.5
        assert result.next_review_at == now + timedelta(days=8)

    def test_third_success_multiplies_interval(self, now: datetime) -> None:
        state = SchedulingState(
            easiness_factor=2.5, repetition_count=2, interval_days=6, next_review_at=now
        )

        assert schedule(state, 4, now).interval_days == 15
        # easiness rises to 2.6 before the interval is computed
        assert schedule(state, 5, now).interval_days == 16

    def test_interval_grows_on_repeated_success(self, now: datetime) -> None:
        state = initial_scheduling_state(now)
        intervals = []
        for _ in range(6):
            state = schedule(state, 5, now)
            intervals.append(state.interval_days)

        assert intervals[:2] == [1, 6]
        assert intervals == sorted(intervals)
        assert len(set(intervals[1:])) == len(intervals[1:])

    def test_easiness_never_below_floor(self, now: datetime) -> None:
        state = initial_scheduling_state(now)
        for _ in range(20):
            state = schedule(state, 0, now)

        assert state.easiness_factor == pytest.approx(1.3)
        assert state.interval_days == 1

    def test_review_is_projected_from_review_time(self, now: datetime) -> None:
        overdue = SchedulingState(
            repetition_count=1, interval_days=1, next_review_at=now - timedelta(days=10)
        )

        result = schedule(overdue, 4, now)

        assert result.next_review_at == now + timedelta(days=6)

    def test_counters_and_memorization(self, now: datetime) -> None:
        state = SchedulingState(next_review_at=now, memorization_score=50)

        passed = schedule(state, 4, now)
        failed = schedule(passed, 1, now)

        assert passed.total_reviews == 1
        assert passed.correct_reviews == 1
        assert passed.memorization_score == 60
        assert failed.total_reviews == 2
        assert failed.correct_reviews == 1
        assert failed.memorization_score == 40

    def test_memorization_bounds(self, now: datetime) -> None:
        high = SchedulingState(next_review_at=now, memorization_score=95)
        low = SchedulingState(next_review_at=now, memorization_score=15)

        assert schedule(high, 5, now).memorization_score == 100
        assert schedule(low, 0, now).memorization_score == 10

    def test_does_not_mutate_input(self, now: datetime) -> None:
        state = initial_scheduling_state(now)
        schedule(state, 5, now)
        assert state.repetition_count == 0

    @pytest.mark.parametrize("quality", [-1, 6, 2.5, True, "4"])
    def test_invalid_quality(self, now: datetime, quality: object) -> None:
        with pytest.raises(ValueError):
            schedule(initial_scheduling_state(now), quality, now)  # type: ignore[arg-type]

    def test_custom_settings(self, now: datetime) -> None:
        settings = SchedulerSettings(second_interval_days=4, passing_quality=4)
        state = SchedulingState(repetition_count=1, interval_days=1, next_review_at=now)

        assert schedule(state, 4, now, settings=settings).interval_days == 4
        assert schedule(state, 3, now, settings=settings).repetition_count == 0


class TestInitialSchedulingState:
    """Tests for initial_scheduling_state()."""

    def test_new_word_is_due_now(self, now: datetime) -> None:
        state = initial_scheduling_state(now)

        assert state.is_due(now)
        assert state.repetition_count == 0
        assert state.last_reviewed_at is None
        assert state.easiness_factor == 2.5
