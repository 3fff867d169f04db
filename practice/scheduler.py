"""SM-2 spaced repetition scheduler."""

import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Tuple

from practice.models import MIN_EASINESS, ProblemMemoryState

PASSING_GRADE = 3
MIN_GRADE = 0
MAX_GRADE = 5


class InvalidGradeError(ValueError):
    """Grade is not an integer in 0-5."""


def check_grade(grade) -> int:
    if isinstance(grade, bool) or not isinstance(grade, int):
        raise InvalidGradeError(f"Grade must be an integer 0-5, got {grade!r}")
    if not (MIN_GRADE <= grade <= MAX_GRADE):
        raise InvalidGradeError(f"Grade must be 0-5, got {grade}")
    return grade


def round_half_up(value: float) -> int:
    """Round half away from zero for the positive interval products."""
    return int(math.floor(value + 0.5))


def sm2_step(
    grade: int,
    repetition_count: int,
    easiness_factor: float,
    interval_days: int,
) -> Tuple[int, float, int]:
    """
    One SM-2 step on the bare numbers.

    Args:
        grade:            0-5 (0=no clue, 5=solved easily)
        repetition_count: Consecutive passes so far
        easiness_factor:  Current easiness (>= 1.3)
        interval_days:    Current interval in days

    Returns:
        (repetition_count, easiness_factor, interval_days) after the review
    """
    check_grade(grade)

    if grade >= PASSING_GRADE:
        if repetition_count == 0:
            new_interval = 1
        elif repetition_count == 1:
            new_interval = 6
        else:
            new_interval = round_half_up(interval_days * easiness_factor)
        new_reps = repetition_count + 1
    else:
        new_reps = 0
        new_interval = 1

    # Same update for pass and fail:
    # EF' = EF + (0.1 - (5-q) * (0.08 + (5-q) * 0.02))
    new_ease = easiness_factor + (0.1 - (5 - grade) * (0.08 + (5 - grade) * 0.02))
    new_ease = max(MIN_EASINESS, new_ease)

    return new_reps, new_ease, new_interval


def schedule(state: ProblemMemoryState, grade: int, now: datetime) -> ProblemMemoryState:
    """
    Apply a grade to a memory state and return the new state.

    The input state is not modified. next_review_at is now plus interval_days
    calendar days, so the wall-clock time of the review is kept.

    Raises:
        InvalidGradeError if grade is not an integer 0-5.
    """
    reps, ease, interval = sm2_step(
        grade,
        state.repetition_count,
        state.easiness_factor,
        state.interval_days,
    )
    return replace(
        state,
        easiness_factor=ease,
        repetition_count=reps,
        interval_days=interval,
        next_review_at=now + timedelta(days=interval),
        last_reviewed_at=now,
    )
