import logging
from typing import List, Optional

from spacedeck_app.core.error_handlers import NotFoundError
from spacedeck_app.core.extensions import db
from spacedeck_app.core.signals import content_created, content_deleted
from spacedeck_app.models import Card
from spacedeck_app.modules.content.services.collection_service import CollectionService
from spacedeck_app.modules.scheduling.interface import SchedulingInterface
from spacedeck_app.utils.time_utils import utc_now_ms

logger = logging.getLogger(__name__)


class CardService:

    @staticmethod
    def get(card_id: str) -> Card:
        card = db.session.get(Card, card_id)
        if card is None:
            raise NotFoundError(f"Card {card_id} not found", resource='card')
        return card

    @staticmethod
    def list_for_collection(collection_id: str) -> List[Card]:
        """All cards of a collection, newest first."""
        CollectionService.get(collection_id)
        return (
            Card.query
            .filter_by(collection_id=collection_id)
            .order_by(Card.created_at.desc(), Card.card_id.asc())
            .all()
        )

    @staticmethod
    def create(
        collection_id: str,
        front: str,
        back: str,
        user_id: Optional[str] = None,
        now: Optional[int] = None,
    ) -> Card:
        """Create a card carrying the default scheduling state (new, due now)."""
        CollectionService.get(collection_id)

        if now is None:
            now = utc_now_ms()
        initial = SchedulingInterface.initial_state(now)

        card = Card(
            collection_id=collection_id,
            front=front,
            back=back,
            state=initial.state.value,
            due_at=initial.due_at,
            last_interval=initial.last_interval,
            ease_factor=initial.ease_factor,
            reps=initial.reps,
            lapses=initial.lapses,
            created_at=now,
            updated_at=now,
        )
        db.session.add(card)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        content_created.send(
            None,
            user_id=user_id,
            content_type='card',
            content_id=card.card_id,
        )
        return card

    @staticmethod
    def update_content(card_id: str, front: Optional[str] = None, back: Optional[str] = None) -> Card:
        """Edit the front/back text. Scheduling fields are left alone."""
        card = CardService.get(card_id)
        if front is not None:
            card.front = front
        if back is not None:
            card.back = back
        card.updated_at = utc_now_ms()
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return card

    @staticmethod
    def delete(card_id: str, user_id: Optional[str] = None) -> None:
        card = CardService.get(card_id)
        db.session.delete(card)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Card {card_id} deleted")
        content_deleted.send(
            None,
            user_id=user_id,
            content_type='card',
            content_id=card_id,
        )
