# modules/scheduling/config.py
# Scheduling policy. Changing any value changes the review cadence of every existing card.

from ...utils.time_utils import MS_PER_DAY, MS_PER_MINUTE


class SchedulingConstants:
    INITIAL_EASE_FACTOR = 2.5
    MIN_EASE_FACTOR = 1.3

    # Ease adjustments per rating
    AGAIN_EASE_PENALTY = 0.2
    HARD_EASE_DELTA = -0.15
    GOOD_EASE_DELTA = 0.0
    EASY_EASE_DELTA = 0.15

    # Interval steps (days)
    FIRST_INTERVAL_DAYS = 1
    SECOND_INTERVAL_DAYS = 3
    SECOND_INTERVAL_EASY_DAYS = 4
    EASY_BONUS = 1.3

    # A failed card comes back after this delay instead of immediately
    RELEARN_DELAY_MS = 10 * MS_PER_MINUTE
    DAY_MS = MS_PER_DAY
