# File: spacedeck_app/modules/scheduling/schemas.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Any, Dict

from .config import SchedulingConstants
from .exceptions import InvalidRatingError


class Rating(IntEnum):
    """Recall quality reported for a single review."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @classmethod
    def coerce(cls, value: Any) -> 'Rating':
        """Return the Rating for ``value`` or raise InvalidRatingError.

        Accepts Rating members and plain ints. Booleans, floats and strings
        are rejected even when they look like a valid rating.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRatingError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidRatingError(value) from None

    @property
    def passed(self) -> bool:
        return self is not Rating.AGAIN


class CardState(str, Enum):
    """Lifecycle phase of a card. Values are the persisted strings."""

    NEW = 'new'
    LEARNING = 'learning'
    REVIEW = 'review'
    RELEARNING = 'relearning'


@dataclass(frozen=True)
class CardSchedulingState:
    """Immutable scheduling state of one card.

    ``due_at`` is UTC epoch milliseconds, ``last_interval`` is in days.
    """

    state: CardState
    due_at: int
    last_interval: float = 0.0
    ease_factor: float = SchedulingConstants.INITIAL_EASE_FACTOR
    reps: int = 0
    lapses: int = 0

    @classmethod
    def initial(cls, now: int) -> 'CardSchedulingState':
        """Default state of a freshly created card, due immediately."""
        return cls(state=CardState.NEW, due_at=now)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['state'] = self.state.value
        return data


@dataclass(frozen=True)
class ReviewResult:
    """Outcome of a persisted review."""

    card_id: str
    rating: Rating
    previous: CardSchedulingState
    current: CardSchedulingState

    @property
    def next_review_in_days(self) -> int:
        return int(self.current.last_interval)
