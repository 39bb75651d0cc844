"""Spaced-repetition scheduling for lyricloop.

This module contains the SM-2 family review scheduler. Given an item's
current SchedulingState, a review quality (0-5) and the review time, it
computes the next state. It is a pure function of its inputs.

Rules:
    quality < 3  (lapse):   repetition_count = 0, interval = 1 day
    quality >= 3 (recall):  repetition_count += 1
                            interval = 1, then 6, then round(interval * EF)
    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3

The next review is projected from the review time, not from the
previously scheduled due date.

Reference: https://www.supermemo.com/en/archives1990-2015/english/ol/sm2
"""

from datetime import datetime, timedelta

from lyricloop.config import SchedulerSettings
from lyricloop.models.vocabulary import SchedulingState
from lyricloop.utils.normalize import round_half_up

__all__ = [
    "MAX_QUALITY",
    "MIN_QUALITY",
    "initial_scheduling_state",
    "next_easiness",
    "schedule",
]

MIN_QUALITY = 0
MAX_QUALITY = 5

_MEMORIZATION_DELTAS: dict[int, int] = {5: 15, 4: 10, 3: 5, 2: -10, 1: -20, 0: -20}
_MEMORIZATION_MIN_AFTER_LAPSE = 10
_EASINESS_PRECISION = 4

_DEFAULT_SETTINGS = SchedulerSettings()


def _validate_quality(quality: int) -> None:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise ValueError(f"quality must be an int in [0, 5], got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"quality must be in [0, 5], got {quality}")


def next_easiness(easiness: float, quality: int, floor: float = 1.3) -> float:
    """Apply the SM-2 easiness update.

    Args:
        easiness: Current easiness factor
        quality: Review quality (0-5)
        floor: Minimum easiness factor

    Returns:
        Updated easiness factor, floored and rounded to 4 decimals
    """
    miss = MAX_QUALITY - quality
    updated = easiness + (0.1 - miss * (0.08 + miss * 0.02))
    return round(max(floor, updated), _EASINESS_PRECISION)


def _next_memorization(score: int, quality: int) -> int:
    delta = _MEMORIZATION_DELTAS[quality]
    if delta >= 0:
        return min(100, score + delta)
    return max(_MEMORIZATION_MIN_AFTER_LAPSE, score + delta)


def initial_scheduling_state(
    now: datetime,
    *,
    settings: SchedulerSettings | None = None,
) -> SchedulingState:
    """Build the state of a newly saved word: due immediately, never reviewed."""
    settings = settings or _DEFAULT_SETTINGS
    return SchedulingState(
        easiness_factor=settings.default_easiness,
        repetition_count=0,
        interval_days=0,
        next_review_at=now,
        last_reviewed_at=None,
    )


def schedule(
    state: SchedulingState,
    quality: int,
    now: datetime,
    *,
    settings: SchedulerSettings | None = None,
) -> SchedulingState:
    """Compute the scheduling state after a review.

    Args:
        state: Current scheduling state
        quality: Review quality, an int in [0, 5]
        now: Review time
        settings: Scheduler settings (defaults when omitted)

    Returns:
        New SchedulingState

    Raises:
        ValueError: If quality is not an int in [0, 5]. Callers must
            validate user input; the scheduler does not clamp.
    """
    _validate_quality(quality)
    settings = settings or _DEFAULT_SETTINGS

    easiness = next_easiness(state.easiness_factor, quality, settings.easiness_floor)
    passed = quality >= settings.passing_quality

    if not passed:
        repetitions = 0
        interval = settings.lapse_interval_days
    else:
        repetitions = state.repetition_count + 1
        if repetitions == 1:
            interval = settings.first_interval_days
        elif repetitions == 2:
            interval = settings.second_interval_days
        else:
            interval = round_half_up(state.interval_days * easiness)
        interval = max(1, interval)

    return SchedulingState(
        easiness_factor=easiness,
        repetition_count=repetitions,
        interval_days=interval,
        next_review_at=now + timedelta(days=interval),
        last_reviewed_at=now,
        total_reviews=state.total_reviews + 1,
        correct_reviews=state.correct_reviews + (1 if passed else 0),
        memorization_score=_next_memorization(state.memorization_score, quality),
        schema_version=state.schema_version,
    )
