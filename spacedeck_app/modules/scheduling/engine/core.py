"""
Review scheduler: a simplified SM-2 variant.

Pure logic layer: no database, no Flask context, no clock. Every function
here maps its arguments to a new value and never mutates its inputs.

Ratings:
  1 - Again: forgotten, the card goes to relearning for 10 minutes
  2 - Hard:  passed, ease drops by 0.15
  3 - Good:  passed, ease unchanged
  4 - Easy:  passed, ease grows by 0.15 and the interval gets a 1.3 bonus

Interval steps after a pass: 1 day, then 3 days (4 if Easy), then
ceil(last_interval * ease_factor * bonus).
"""
from __future__ import annotations

import math
from typing import Any, Dict

from ..config import SchedulingConstants as C
from ..exceptions import InvariantViolationError
from ..schemas import CardSchedulingState, CardState, Rating

_EASE_DELTAS = {
    Rating.HARD: C.HARD_EASE_DELTA,
    Rating.GOOD: C.GOOD_EASE_DELTA,
    Rating.EASY: C.EASY_EASE_DELTA,
}


def check_invariants(state: CardSchedulingState) -> None:
    """Raise InvariantViolationError if ``state`` could not have come from a valid transition."""

    if not isinstance(state.state, CardState):
        raise InvariantViolationError(f"Unknown card state {state.state!r}", state)
    if state.ease_factor < C.MIN_EASE_FACTOR:
        raise InvariantViolationError(
            f"ease_factor {state.ease_factor} is below the {C.MIN_EASE_FACTOR} floor", state
        )
    if state.last_interval < 0:
        raise InvariantViolationError(f"last_interval {state.last_interval} is negative", state)
    if state.reps < 0 or state.lapses < 0:
        raise InvariantViolationError(
            f"reps ({state.reps}) and lapses ({state.lapses}) must be non-negative", state
        )
    if state.last_interval == 0 and state.state is CardState.REVIEW:
        raise InvariantViolationError("A card in review must have a non-zero interval", state)


def _next_interval(last_interval: float, ease_factor: float, rating: Rating) -> int:
    if last_interval == 0:
        return C.FIRST_INTERVAL_DAYS
    if last_interval == 1:
        return C.SECOND_INTERVAL_EASY_DAYS if rating is Rating.EASY else C.SECOND_INTERVAL_DAYS
    bonus = C.EASY_BONUS if rating is Rating.EASY else 1.0
    return math.ceil(last_interval * ease_factor * bonus)


def advance(current: CardSchedulingState, rating: Any, now: int) -> CardSchedulingState:
    """
    Compute the scheduling state that follows a review.

    Args:
        current: State produced by a previous call or by CardSchedulingState.initial
        rating: Rating member or an int 1-4
        now: Review time in UTC epoch milliseconds

    Returns:
        A new CardSchedulingState; ``current`` is left untouched.

    Raises:
        InvalidRatingError: ``rating`` is not one of 1-4
        InvariantViolationError: ``current`` is malformed
    """
    rating = Rating.coerce(rating)
    check_invariants(current)

    if not rating.passed:
        new_interval = 0
        new_ease = max(C.MIN_EASE_FACTOR, current.ease_factor - C.AGAIN_EASE_PENALTY)
        new_state = CardState.RELEARNING
        lapses = current.lapses + 1
    else:
        new_ease = max(C.MIN_EASE_FACTOR, current.ease_factor + _EASE_DELTAS[rating])
        new_interval = _next_interval(current.last_interval, new_ease, rating)
        new_state = CardState.REVIEW
        lapses = current.lapses

    if new_interval == 0:
        due_at = now + C.RELEARN_DELAY_MS
    else:
        due_at = now + new_interval * C.DAY_MS

    return CardSchedulingState(
        state=new_state,
        due_at=due_at,
        last_interval=float(new_interval),
        ease_factor=new_ease,
        reps=current.reps + 1,
        lapses=lapses,
    )


def preview(current: CardSchedulingState, now: int) -> Dict[Rating, CardSchedulingState]:
    """Outcome of each of the four ratings, without committing to any."""
    return {rating: advance(current, rating, now) for rating in Rating}


def format_interval(state: CardSchedulingState, now: int) -> str:
    """Human-readable distance from ``now`` to ``state.due_at`` (e.g. '10m', '3d', '2.1mo')."""
    days = (state.due_at - now) / C.DAY_MS
    if days < 1.0:
        return f"{round(days * 1440)}m"
    if days >= 30.0:
        return f"{round(days / 30.0, 1)}mo"
    return f"{round(days, 1):g}d"
