"""
Tests for the review scheduler engine.

Tests cover:
- Worked review scenarios (new card, second step, steady-state growth, lapse)
- Ease factor floor and interval growth properties
- Rating validation and input invariant checks
- Rating previews
"""

import dataclasses
import itertools

import pytest

from spacedeck_app.modules.scheduling.config import SchedulingConstants
from spacedeck_app.modules.scheduling.engine import advance, format_interval, preview
from spacedeck_app.modules.scheduling.exceptions import (
    InvalidRatingError,
    InvariantViolationError,
)
from spacedeck_app.modules.scheduling.schemas import CardSchedulingState, CardState, Rating

T = 1_700_000_000_000
DAY = 86_400_000
TEN_MINUTES = 600_000


def _state(**fields):
    values = dict(state=CardState.REVIEW, due_at=T, last_interval=10.0, ease_factor=2.5, reps=5, lapses=0)
    values.update(fields)
    return CardSchedulingState(**values)


VALID_STATES = [
    CardSchedulingState.initial(T),
    _state(state=CardState.RELEARNING, last_interval=0.0, ease_factor=1.3, reps=7, lapses=3),
    _state(state=CardState.LEARNING, last_interval=0.0, ease_factor=2.0, reps=1),
    _state(last_interval=1.0, ease_factor=2.5, reps=1),
    _state(last_interval=3.0, ease_factor=1.3, reps=2),
    _state(last_interval=10.0, ease_factor=2.0, reps=4, lapses=1),
    _state(last_interval=250.0, ease_factor=3.1, reps=12),
]


class TestScenarios:
    """Worked examples of single reviews."""

    def test_new_card_rated_good(self):
        result = advance(CardSchedulingState.initial(T), Rating.GOOD, T)

        assert result.last_interval == 1
        assert result.state == CardState.REVIEW
        assert result.due_at == T + DAY
        assert result.reps == 1
        assert result.ease_factor == 2.5
        assert result.lapses == 0

    def test_second_review_rated_easy(self):
        result = advance(_state(last_interval=1.0, ease_factor=2.5, reps=1), Rating.EASY, T)

        assert result.last_interval == 4
        assert result.ease_factor == pytest.approx(2.65)
        assert result.due_at == T + 4 * DAY

    def test_second_review_rated_good_or_hard_gets_three_days(self):
        for rating in (Rating.GOOD, Rating.HARD):
            result = advance(_state(last_interval=1.0), rating, T)
            assert result.last_interval == 3
            assert result.due_at == T + 3 * DAY

    def test_steady_state_growth(self):
        result = advance(_state(last_interval=10.0, ease_factor=2.0), Rating.GOOD, T)

        assert result.last_interval == 20
        assert result.ease_factor == 2.0
        assert result.due_at == T + 20 * DAY

    def test_steady_state_easy_applies_bonus(self):
        result = advance(_state(last_interval=10.0, ease_factor=2.0), Rating.EASY, T)

        # ceil(10 * 2.15 * 1.3) = ceil(27.95)
        assert result.ease_factor == pytest.approx(2.15)
        assert result.last_interval == 28

    def test_steady_state_hard_uses_lowered_ease(self):
        result = advance(_state(last_interval=10.0, ease_factor=2.0), Rating.HARD, T)

        assert result.ease_factor == pytest.approx(1.85)
        assert result.last_interval == 19  # ceil(18.5)

    def test_again_floors_ease_and_relearns(self):
        current = _state(ease_factor=1.35, lapses=2)
        result = advance(current, Rating.AGAIN, T)

        assert result.ease_factor == 1.3
        assert result.last_interval == 0
        assert result.state == CardState.RELEARNING
        assert result.due_at == T + TEN_MINUTES
        assert result.lapses == 3

    def test_hard_never_drops_ease_below_floor(self):
        result = advance(_state(ease_factor=1.3, last_interval=4.0), Rating.HARD, T)

        assert result.ease_factor == 1.3
        assert result.last_interval == 6  # ceil(4 * 1.3)

    def test_relearning_card_restarts_at_one_day(self):
        current = _state(state=CardState.RELEARNING, last_interval=0.0, ease_factor=2.1)
        result = advance(current, Rating.GOOD, T)

        assert result.last_interval == 1
        assert result.state == CardState.REVIEW


class TestProperties:
    """Invariants that hold for every valid state and rating."""

    @pytest.mark.parametrize('current,rating', list(itertools.product(VALID_STATES, Rating)))
    def test_transition_invariants(self, current, rating):
        result = advance(current, rating, T)

        assert result.ease_factor >= SchedulingConstants.MIN_EASE_FACTOR
        assert result.reps == current.reps + 1
        assert result.due_at > T
        if result.last_interval == 0:
            assert result.state in (CardState.NEW, CardState.LEARNING, CardState.RELEARNING)
        if rating is Rating.AGAIN:
            assert result.last_interval == 0
            assert result.state == CardState.RELEARNING
            assert result.lapses == current.lapses + 1
        else:
            assert result.lapses == current.lapses
            assert result.state == CardState.REVIEW
            assert result.due_at == T + int(result.last_interval) * DAY

    def test_input_is_not_mutated(self):
        current = _state()
        snapshot = dataclasses.replace(current)

        advance(current, Rating.EASY, T)

        assert current == snapshot

    def test_state_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _state().reps = 99

    def test_same_inputs_give_same_output(self):
        current = _state(last_interval=7.0, ease_factor=2.2)
        assert advance(current, Rating.GOOD, T) == advance(current, Rating.GOOD, T)

    def test_repeated_again_decays_ease_to_floor(self):
        state = CardSchedulingState.initial(T)
        previous_ease = state.ease_factor

        for _ in range(15):
            state = advance(state, Rating.AGAIN, T)
            assert state.last_interval == 0
            assert state.ease_factor <= previous_ease
            assert state.ease_factor >= 1.3
            previous_ease = state.ease_factor

        assert state.ease_factor == 1.3
        assert state.lapses == 15
        assert state.reps == 15

    def test_repeated_good_grows_interval(self):
        state = _state(last_interval=2.0, ease_factor=1.3)
        previous = state.last_interval

        for _ in range(10):
            state = advance(state, Rating.GOOD, T)
            assert state.last_interval >= previous
            assert state.ease_factor == 1.3
            previous = state.last_interval

    def test_integer_rating_accepted(self):
        assert advance(_state(), 3, T) == advance(_state(), Rating.GOOD, T)


class TestValidation:

    @pytest.mark.parametrize('rating', [
        0, 5, -1, 42, True, 3.0, None, 'good', '', [3],
        '3', ' 4 ', '\u00b2', '\u0663',
    ])
    def test_invalid_rating_rejected(self, rating):
        with pytest.raises(InvalidRatingError):
            advance(_state(), rating, T)

    def test_rating_coerce_accepts_ints_and_members(self):
        assert Rating.coerce(4) is Rating.EASY
        assert Rating.coerce(Rating.AGAIN) is Rating.AGAIN

    def test_only_again_is_a_failed_recall(self):
        assert not Rating.AGAIN.passed
        assert all(rating.passed for rating in (Rating.HARD, Rating.GOOD, Rating.EASY))

    def test_invalid_rating_checked_before_state(self):
        broken = _state(ease_factor=0.5)
        with pytest.raises(InvalidRatingError):
            advance(broken, 7, T)

    @pytest.mark.parametrize('broken', [
        _state(ease_factor=1.29),
        _state(last_interval=-1.0),
        _state(reps=-1),
        _state(lapses=-2),
        _state(state=CardState.REVIEW, last_interval=0.0),
    ])
    def test_invariant_violation_fails_loudly(self, broken):
        with pytest.raises(InvariantViolationError):
            advance(broken, Rating.GOOD, T)

    def test_invalid_rating_error_maps_to_400(self):
        error = InvalidRatingError(5)
        assert error.status_code == 400
        assert error.code == 'INVALID_RATING'


class TestPreview:

    def test_preview_covers_every_rating(self):
        current = _state(last_interval=1.0)
        outcomes = preview(current, T)

        assert set(outcomes) == set(Rating)
        assert outcomes[Rating.AGAIN].due_at == T + TEN_MINUTES
        assert outcomes[Rating.GOOD].last_interval == 3
        assert outcomes[Rating.EASY].last_interval == 4

    def test_format_interval(self):
        current = _state(last_interval=1.0)
        outcomes = preview(current, T)

        assert format_interval(outcomes[Rating.AGAIN], T) == '10m'
        assert format_interval(outcomes[Rating.GOOD], T) == '3d'
        assert format_interval(advance(_state(last_interval=40.0, ease_factor=2.0), Rating.GOOD, T), T) == '2.7mo'
