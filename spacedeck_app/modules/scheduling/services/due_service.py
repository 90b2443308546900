from typing import Any, List, Optional
import logging

from sqlalchemy import func

from spacedeck_app.core.defaults import get_setting
from spacedeck_app.core.error_handlers import ValidationError
from spacedeck_app.core.extensions import db
from spacedeck_app.models import Card
from spacedeck_app.utils.time_utils import utc_now_ms

logger = logging.getLogger(__name__)


class DueCardService:
    """Read-only selection of cards whose review time has come."""

    @staticmethod
    def resolve_limit(limit: Any = None) -> int:
        """Apply the configured default and ceiling to a requested page size."""
        if limit is None:
            return int(get_setting('DUE_CARDS_LIMIT', 50))
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError('limit must be a positive integer', errors={'limit': limit})
        if limit < 1:
            raise ValidationError('limit must be a positive integer', errors={'limit': limit})

        ceiling = int(get_setting('DUE_CARDS_MAX_LIMIT', 200))
        if limit > ceiling:
            logger.debug(f"Due-card limit {limit} clamped to {ceiling}")
            return ceiling
        return limit

    @staticmethod
    def select_due(collection_id: str, now: Optional[int] = None, limit: Any = None) -> List[Card]:
        """
        Cards of ``collection_id`` with ``due_at <= now``, oldest-due first.

        Ties on ``due_at`` are broken by card id so the same data and ``now``
        always give the same sequence. Cards past ``limit`` stay due and show
        up on a later call. Nothing is reserved: concurrent callers may receive
        overlapping sets.
        """
        limit = DueCardService.resolve_limit(limit)
        if now is None:
            now = utc_now_ms()

        return (
            Card.query
            .filter(Card.collection_id == collection_id, Card.due_at <= now)
            .order_by(Card.due_at.asc(), Card.card_id.asc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_due(collection_id: str, now: Optional[int] = None) -> int:
        if now is None:
            now = utc_now_ms()
        return (
            db.session.query(func.count(Card.card_id))
            .filter(Card.collection_id == collection_id, Card.due_at <= now)
            .scalar()
        ) or 0
