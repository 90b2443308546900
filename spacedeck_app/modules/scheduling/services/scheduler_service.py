from typing import Any, Dict, Optional
import logging

from sqlalchemy import update

from spacedeck_app.core.extensions import db
from spacedeck_app.models import Card
from spacedeck_app.modules.scheduling.engine.core import advance, format_interval, preview
from spacedeck_app.modules.scheduling.exceptions import (
    CardNotFoundError,
    ConcurrentReviewError,
    InvariantViolationError,
)
from spacedeck_app.modules.scheduling.schemas import (
    CardSchedulingState,
    CardState,
    Rating,
    ReviewResult,
)
from spacedeck_app.modules.scheduling.signals import card_reviewed
from spacedeck_app.utils.time_utils import utc_now_ms

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Orchestrator for review scheduling.
    Handles DB interactions, Engine calls, and Signal emission.
    """

    @staticmethod
    def state_from_card(card: Card) -> CardSchedulingState:
        try:
            state = CardState(card.state)
        except ValueError:
            raise InvariantViolationError(
                f"Card {card.card_id} has unknown state {card.state!r}"
            ) from None
        return CardSchedulingState(
            state=state,
            due_at=card.due_at,
            last_interval=card.last_interval,
            ease_factor=card.ease_factor,
            reps=card.reps,
            lapses=card.lapses,
        )

    @staticmethod
    def _load_card(card_id: str) -> Card:
        card = db.session.get(Card, card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    @staticmethod
    def save_state(
        card_id: str,
        expected: CardSchedulingState,
        new_state: CardSchedulingState,
        now: int,
    ) -> None:
        """
        Persist ``new_state`` only if the stored state still matches ``expected``.

        ``reps`` grows on every review, so it doubles as the row version: a
        second writer holding the same snapshot matches zero rows and gets a
        ConcurrentReviewError instead of silently overwriting the first review.
        """
        stmt = (
            update(Card)
            .where(Card.card_id == card_id, Card.reps == expected.reps)
            .values(
                state=new_state.state.value,
                due_at=new_state.due_at,
                last_interval=new_state.last_interval,
                ease_factor=new_state.ease_factor,
                reps=new_state.reps,
                lapses=new_state.lapses,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = db.session.execute(stmt)
        except Exception:
            db.session.rollback()
            raise

        if result.rowcount != 1:
            db.session.rollback()
            logger.warning(f"Concurrent review detected for card {card_id} (expected reps={expected.reps})")
            raise ConcurrentReviewError(card_id)

        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def process_review(card_id: str, rating: Any, now: Optional[int] = None) -> ReviewResult:
        """
        Main entry point for processing a review.

        Validates the rating before touching the database, loads the card,
        advances its state and persists the result.
        """
        rating = Rating.coerce(rating)

        # 1. Fetch Data
        card = SchedulerService._load_card(card_id)
        current = SchedulerService.state_from_card(card)

        if now is None:
            now = utc_now_ms()

        # 2. Call Engine
        try:
            new_state = advance(current, rating, now)
        except InvariantViolationError as e:
            logger.error(f"Refusing to schedule card {card_id}: {e.message} (state={current})")
            raise

        # 3. Persist
        SchedulerService.save_state(card_id, current, new_state, now)

        logger.info(
            f"Card {card_id} reviewed rating={int(rating)} state={new_state.state.value} "
            f"interval={new_state.last_interval}d ease={new_state.ease_factor:.2f}"
        )

        # 4. Emit Signal
        card_reviewed.send(
            SchedulerService,
            card_id=card_id,
            rating=int(rating),
            previous_state=current.to_dict(),
            new_state=new_state.to_dict(),
        )

        return ReviewResult(card_id=card_id, rating=rating, previous=current, current=new_state)

    @staticmethod
    def get_preview_intervals(card_id: str, now: Optional[int] = None) -> Dict[str, Dict[str, Any]]:
        """
        Preview the outcome of every rating for a card.

        Returns a dict keyed by rating string:
        {
            "1": {"interval": "10m", "nextReviewInDays": 0, "dueAt": ..., "easeFactor": 2.3},
            "3": {"interval": "1d", ...},
            ...
        }
        """
        card = SchedulerService._load_card(card_id)
        current = SchedulerService.state_from_card(card)
        if now is None:
            now = utc_now_ms()

        return {
            str(int(rating)): {
                'interval': format_interval(outcome, now),
                'nextReviewInDays': int(outcome.last_interval),
                'dueAt': outcome.due_at,
                'easeFactor': round(outcome.ease_factor, 2),
                'state': outcome.state.value,
            }
            for rating, outcome in preview(current, now).items()
        }
