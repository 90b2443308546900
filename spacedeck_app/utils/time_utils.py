# File: spacedeck_app/utils/time_utils.py
# All scheduling timestamps are UTC epoch milliseconds.

import time

MS_PER_MINUTE = 60 * 1000
MS_PER_DAY = 24 * 60 * MS_PER_MINUTE


def utc_now_ms() -> int:
    """Current wall-clock time as UTC epoch milliseconds."""
    return time.time_ns() // 1_000_000
