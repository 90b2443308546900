from blinker import Namespace

# Define a signal namespace for scheduling
_signals = Namespace()

# Signal emitted after a review is persisted
# Arguments:
# - sender: The SchedulerService class
# - card_id: str
# - rating: int
# - previous_state: dict (CardSchedulingState.to_dict before the review)
# - new_state: dict (CardSchedulingState.to_dict after the review)
card_reviewed = _signals.signal('card-reviewed')
