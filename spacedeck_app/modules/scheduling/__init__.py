"""Review scheduling: the SM-2 variant scheduler and due-card selection.

Public surface:
- ``engine.advance``: pure state transition for one review
- ``services.SchedulerService``: load, advance and persist a review
- ``services.DueCardService``: oldest-due-first selection per collection
- ``interface.SchedulingInterface``: hooks used by the content module
"""

from .engine import advance, preview
from .schemas import CardSchedulingState, CardState, Rating, ReviewResult

__all__ = [
    'advance',
    'preview',
    'CardSchedulingState',
    'CardState',
    'Rating',
    'ReviewResult',
]
