"""
SRS (Spaced Repetition System) service implementing the SM-2 algorithm.

Everything here is pure calculation: the caller supplies the prior progress
state and the current time, and persists the result itself.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from app.core.exceptions import InvalidGradeError
from app.models.card_progress import CardProgress

logger = logging.getLogger(__name__)


# Defaults for a card that has never been reviewed
DEFAULT_INTERVAL = 0
DEFAULT_EASE_FACTOR = 2.5
DEFAULT_REVIEW_COUNT = 0

MIN_EASE_FACTOR = 1.3

# Quality scale: 0-2 is a failed recall, 3-5 a successful one
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
RELEARN_INTERVAL_DAYS = 1


@dataclass(frozen=True)
class ProgressState:
    """The three SM-2 inputs carried between reviews."""
    interval: int
    ease_factor: float
    review_count: int

    @classmethod
    def default(cls) -> "ProgressState":
        return cls(
            interval=DEFAULT_INTERVAL,
            ease_factor=DEFAULT_EASE_FACTOR,
            review_count=DEFAULT_REVIEW_COUNT,
        )


@dataclass(frozen=True)
class SM2Result:
    interval: int
    ease_factor: float
    review_count: int


@dataclass(frozen=True)
class ScheduleResult:
    """New progress state produced by a single review."""
    interval: int
    ease_factor: float
    review_count: int
    next_review_at: datetime
    last_reviewed_at: datetime


def validate_quality(quality) -> int:
    """
    Check that a review grade is an integer on the 0-5 scale.

    Raises:
        InvalidGradeError: If quality is not an int (bools included) or is out of range
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidGradeError(quality)
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise InvalidGradeError(quality)
    return quality


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def calculate_ease_factor(quality: int, previous_ease_factor: float) -> float:
    """
    Apply the SM-2 ease factor update.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3.

    Args:
        quality: Review grade (0-5)
        previous_ease_factor: Ease factor before this review

    Returns:
        Updated ease factor
    """
    distance = MAX_QUALITY - quality
    ease_factor = previous_ease_factor + (0.1 - distance * (0.08 + distance * 0.02))
    if ease_factor < MIN_EASE_FACTOR:
        ease_factor = MIN_EASE_FACTOR
    return ease_factor


def calculate_sm2(
    quality: int,
    previous_interval: int,
    previous_ease_factor: float,
    review_count: int
) -> SM2Result:
    """
    Calculate the next interval, ease factor and review count.

    Successful recall (quality >= 3):
    - First success (review_count 0): 1 day
    - Second consecutive success (review_count 1): 6 days
    - Later successes: previous_interval * previous_ease_factor, rounded
    - review_count goes up by one

    Failed recall (quality < 3) resets review_count to 0 and the interval to
    1 day, so the card starts the short cycle again.

    The ease factor is updated from the prior ease factor in both cases.

    Args:
        quality: Review grade (0-5), already validated
        previous_interval: Interval in days before this review
        previous_ease_factor: Ease factor before this review
        review_count: Consecutive successful reviews before this one

    Returns:
        SM2Result with the new interval, ease factor and review count
    """
    if quality >= PASSING_QUALITY:
        if review_count == 0:
            interval = FIRST_INTERVAL_DAYS
        elif review_count == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = round_half_up(previous_interval * previous_ease_factor)
        new_review_count = review_count + 1
    else:
        interval = RELEARN_INTERVAL_DAYS
        new_review_count = 0

    ease_factor = calculate_ease_factor(quality, previous_ease_factor)

    return SM2Result(
        interval=interval,
        ease_factor=ease_factor,
        review_count=new_review_count,
    )


def calculate_next_review_at(interval: int, now: datetime) -> datetime:
    """Return the due time `interval` days after `now`."""
    return now + timedelta(days=interval)


def schedule_review(
    quality: int,
    prior: Optional[Union[ProgressState, CardProgress]],
    now: datetime
) -> ScheduleResult:
    """
    Compute the progress state that follows a review.

    Args:
        quality: Review grade (0-5)
        prior: Existing progress for the card, or None for a card never reviewed
        now: Time of the review

    Returns:
        ScheduleResult to persist as the card's new progress

    Raises:
        InvalidGradeError: If quality is outside 0-5; nothing is computed
    """
    validate_quality(quality)

    if prior is None:
        prior = ProgressState.default()

    result = calculate_sm2(
        quality,
        prior.interval,
        prior.ease_factor,
        prior.review_count
    )

    logger.debug(
        f"SM-2 quality={quality}: interval {prior.interval} -> {result.interval}, "
        f"ease {prior.ease_factor:.2f} -> {result.ease_factor:.2f}, "
        f"reviews {prior.review_count} -> {result.review_count}"
    )

    return ScheduleResult(
        interval=result.interval,
        ease_factor=result.ease_factor,
        review_count=result.review_count,
        next_review_at=calculate_next_review_at(result.interval, now),
        last_reviewed_at=now,
    )
