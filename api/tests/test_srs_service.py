"""
Tests for the SM-2 scheduling functions.

Tests cover:
- Success and failure branches of the interval calculation
- Ease factor update and its 1.3 floor
- Grade validation
- Next review date derivation from an injected clock
"""

import pytest
from datetime import datetime, timedelta

from app.core.exceptions import InvalidGradeError, ValidationError
from app.models import CardProgress
from app.services.srs_service import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    ProgressState,
    calculate_ease_factor,
    calculate_next_review_at,
    calculate_sm2,
    round_half_up,
    schedule_review,
    validate_quality,
)


NOW = datetime(2026, 1, 15, 12, 0, 0)
PASSING = [3, 4, 5]
FAILING = [0, 1, 2]


class TestValidateQuality:
    """Grades must be integers on the 0-5 scale."""

    @pytest.mark.parametrize("quality", [0, 1, 2, 3, 4, 5])
    def test_accepts_scale(self, quality):
        assert validate_quality(quality) == quality

    @pytest.mark.parametrize("quality", [-1, 6, 100])
    def test_rejects_out_of_range(self, quality):
        with pytest.raises(InvalidGradeError):
            validate_quality(quality)

    @pytest.mark.parametrize("quality", [3.5, "4", None, True])
    def test_rejects_non_integers(self, quality):
        with pytest.raises(InvalidGradeError):
            validate_quality(quality)

    def test_invalid_grade_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            validate_quality(9)


class TestCalculateSM2:
    """Interval and review count transitions."""

    @pytest.mark.parametrize("quality", PASSING)
    def test_first_success_is_one_day(self, quality):
        result = calculate_sm2(quality, 0, 2.5, 0)
        assert result.interval == 1
        assert result.review_count == 1

    @pytest.mark.parametrize("quality", PASSING)
    def test_second_success_is_six_days(self, quality):
        result = calculate_sm2(quality, 1, 2.5, 1)
        assert result.interval == 6
        assert result.review_count == 2

    @pytest.mark.parametrize("quality", PASSING)
    @pytest.mark.parametrize("interval,ease_factor,review_count", [
        (6, 2.5, 2),
        (15, 1.3, 3),
        (40, 2.9, 7),
    ])
    def test_later_successes_multiply_by_prior_ease(self, quality, interval, ease_factor, review_count):
        result = calculate_sm2(quality, interval, ease_factor, review_count)
        assert result.interval == round_half_up(interval * ease_factor)
        assert result.review_count == review_count + 1

    @pytest.mark.parametrize("quality", FAILING)
    @pytest.mark.parametrize("interval,ease_factor,review_count", [
        (0, 2.5, 0),
        (6, 2.6, 2),
        (120, 3.1, 9),
    ])
    def test_failure_resets(self, quality, interval, ease_factor, review_count):
        result = calculate_sm2(quality, interval, ease_factor, review_count)
        assert result.interval == 1
        assert result.review_count == 0

    def test_interval_rounds_half_up(self):
        # 5 * 2.5 = 12.5
        result = calculate_sm2(4, 5, 2.5, 2)
        assert result.interval == 13

    def test_uses_prior_ease_not_updated_ease(self):
        # Quality 3 lowers the ease to 2.36, but the interval uses 2.5
        result = calculate_sm2(3, 10, 2.5, 2)
        assert result.interval == 25
        assert result.ease_factor == pytest.approx(2.36)


class TestEaseFactor:
    """Ease factor update and clamping."""

    @pytest.mark.parametrize("quality,expected_delta", [
        (5, 0.1),
        (4, 0.0),
        (3, -0.14),
        (2, -0.32),
        (1, -0.54),
        (0, -0.8),
    ])
    def test_delta_per_quality(self, quality, expected_delta):
        assert calculate_ease_factor(quality, 2.5) == pytest.approx(2.5 + expected_delta)

    @pytest.mark.parametrize("quality", range(0, 6))
    @pytest.mark.parametrize("previous_ease_factor", [1.3, 1.31, 1.4, 1.6, 2.5, 3.5])
    def test_never_below_floor(self, quality, previous_ease_factor):
        assert calculate_ease_factor(quality, previous_ease_factor) >= MIN_EASE_FACTOR

    def test_clamps_to_floor(self):
        assert calculate_ease_factor(0, 1.3) == MIN_EASE_FACTOR
        assert calculate_ease_factor(2, 1.5) == MIN_EASE_FACTOR


class TestScheduleReview:
    """Full review scheduling, including the documented walk-through."""

    def test_defaults_when_no_prior(self):
        result = schedule_review(5, None, NOW)
        assert result.interval == 1
        assert result.ease_factor == pytest.approx(2.6)
        assert result.review_count == 1

    def test_default_state(self):
        state = ProgressState.default()
        assert state.interval == 0
        assert state.ease_factor == DEFAULT_EASE_FACTOR
        assert state.review_count == 0

    def test_scenario_first_review(self):
        result = schedule_review(5, ProgressState(0, 2.5, 0), NOW)
        assert result.interval == 1
        assert result.ease_factor == pytest.approx(2.6)
        assert result.review_count == 1

    def test_scenario_second_review(self):
        result = schedule_review(5, ProgressState(1, 2.6, 1), NOW)
        assert result.interval == 6
        assert result.ease_factor == pytest.approx(2.7)
        assert result.review_count == 2

    def test_scenario_third_review(self):
        result = schedule_review(5, ProgressState(6, 2.7, 2), NOW)
        assert result.interval == 16
        assert result.review_count == 3

    def test_scenario_lapse(self):
        result = schedule_review(1, ProgressState(16, 2.7, 3), NOW)
        assert result.interval == 1
        assert result.review_count == 0
        assert result.ease_factor == pytest.approx(2.16)

    def test_chained_reviews_match_scenarios(self):
        state = None
        for quality in (5, 5, 5):
            result = schedule_review(quality, state, NOW)
            state = ProgressState(result.interval, result.ease_factor, result.review_count)
        assert state.interval == 16
        assert state.ease_factor == pytest.approx(2.8)

    def test_accepts_card_progress_row(self):
        progress = CardProgress(card_id=1, interval=6, ease_factor=2.7, review_count=2, next_review_at=NOW)
        result = schedule_review(5, progress, NOW)
        assert result.interval == 16

    def test_next_review_is_now_plus_interval(self):
        result = schedule_review(5, ProgressState(1, 2.6, 1), NOW)
        assert result.next_review_at == NOW + timedelta(days=6)
        assert result.last_reviewed_at == NOW

    def test_invalid_grade_rejected_before_computation(self):
        with pytest.raises(InvalidGradeError):
            schedule_review(6, None, NOW)

    def test_deterministic_for_same_inputs(self):
        prior = ProgressState(6, 2.7, 2)
        assert schedule_review(4, prior, NOW) == schedule_review(4, prior, NOW)


def test_calculate_next_review_at():
    assert calculate_next_review_at(0, NOW) == NOW
    assert calculate_next_review_at(16, NOW) == NOW + timedelta(days=16)
