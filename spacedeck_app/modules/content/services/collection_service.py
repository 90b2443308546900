import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from spacedeck_app.core.error_handlers import NotFoundError
from spacedeck_app.core.extensions import db
from spacedeck_app.core.signals import content_created, content_deleted
from spacedeck_app.models import Card, Collection
from spacedeck_app.modules.scheduling.interface import SchedulingInterface

logger = logging.getLogger(__name__)


class CollectionService:

    @staticmethod
    def list_for_user(user_id: str) -> List[Collection]:
        """Collections owned by ``user_id``, newest first."""
        return (
            Collection.query
            .filter_by(user_id=user_id)
            .order_by(Collection.created_at.desc(), Collection.collection_id.asc())
            .all()
        )

    @staticmethod
    def get(collection_id: str) -> Collection:
        collection = db.session.get(Collection, collection_id)
        if collection is None:
            raise NotFoundError(f"Collection {collection_id} not found", resource='collection')
        return collection

    @staticmethod
    def create(user_id: str, title: str, description: Optional[str] = None) -> Collection:
        collection = Collection(user_id=user_id, title=title, description=description)
        db.session.add(collection)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Collection {collection.collection_id} created by {user_id}")
        content_created.send(
            None,
            user_id=user_id,
            content_type='collection',
            content_id=collection.collection_id,
            title=title,
        )
        return collection

    @staticmethod
    def delete(collection_id: str, user_id: Optional[str] = None) -> None:
        """Delete a collection together with all of its cards."""
        collection = CollectionService.get(collection_id)
        db.session.delete(collection)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Collection {collection_id} deleted")
        content_deleted.send(
            None,
            user_id=user_id,
            content_type='collection',
            content_id=collection_id,
        )

    @staticmethod
    def summary(collection: Collection, now: Optional[int] = None) -> Dict[str, Any]:
        """Collection record plus card and due counts."""
        card_count = (
            db.session.query(func.count(Card.card_id))
            .filter(Card.collection_id == collection.collection_id)
            .scalar()
        ) or 0
        data = collection.to_dict()
        data['cardCount'] = card_count
        data['dueCount'] = SchedulingInterface.count_due(collection.collection_id, now)
        return data
