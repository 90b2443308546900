from ...core.error_handlers import SpacedeckError


class SchedulingError(SpacedeckError):
    """Base exception for the scheduling module."""

    def __init__(self, message: str, code: str = 'SCHEDULING_ERROR', status_code: int = 500, details: dict = None):
        super().__init__(message=message, code=code, status_code=status_code, details=details)


class InvalidRatingError(SchedulingError):
    """Raised when the provided rating is not one of 1-4."""

    def __init__(self, rating):
        super().__init__(
            f"Rating must be 1 (Again), 2 (Hard), 3 (Good) or 4 (Easy), got {rating!r}",
            code='INVALID_RATING',
            status_code=400,
            details={'rating': repr(rating)},
        )
        self.rating = rating


class CardNotFoundError(SchedulingError):
    """Raised when a review targets a card with no persisted scheduling state."""

    def __init__(self, card_id: str):
        super().__init__(
            f"Card {card_id} not found",
            code='NOT_FOUND',
            status_code=404,
            details={'resource': 'card', 'card_id': card_id},
        )
        self.card_id = card_id


class ConcurrentReviewError(SchedulingError):
    """Raised when the card's scheduling state changed between load and save."""

    def __init__(self, card_id: str):
        super().__init__(
            f"Card {card_id} was reviewed concurrently; reload and retry",
            code='CONCURRENT_REVIEW',
            status_code=409,
            details={'card_id': card_id},
        )
        self.card_id = card_id


class InvariantViolationError(SchedulingError):
    """Raised when the scheduler is handed a state no valid transition could produce."""

    def __init__(self, message: str, state=None):
        super().__init__(
            message,
            code='INVARIANT_VIOLATION',
            status_code=500,
        )
        self.state = state
