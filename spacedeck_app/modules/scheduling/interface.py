# File: spacedeck_app/modules/scheduling/interface.py
from typing import Optional

from .schemas import CardSchedulingState
from .services.due_service import DueCardService
from spacedeck_app.utils.time_utils import utc_now_ms


class SchedulingInterface:
    """Public API for the scheduling module, used by other modules."""

    @staticmethod
    def initial_state(now: Optional[int] = None) -> CardSchedulingState:
        """Scheduling state a newly created card starts with."""
        return CardSchedulingState.initial(utc_now_ms() if now is None else now)

    @staticmethod
    def count_due(collection_id: str, now: Optional[int] = None) -> int:
        """Number of cards in the collection currently due."""
        return DueCardService.count_due(collection_id, now)
