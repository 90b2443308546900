"""Collection and card models."""

from __future__ import annotations

from uuid import uuid4

from ..core.extensions import db
from ..utils.time_utils import utc_now_ms


def _new_id() -> str:
    return str(uuid4())


class Collection(db.Model):
    """A named group of cards owned by one user."""

    __tablename__ = 'collections'

    collection_id = db.Column(db.String(36), primary_key=True, default=_new_id)
    user_id = db.Column(
        db.String(64),
        db.ForeignKey('users.user_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.BigInteger, nullable=False, default=utc_now_ms)

    cards = db.relationship(
        'Card',
        backref='collection',
        lazy=True,
        cascade='all, delete-orphan',
    )

    def to_dict(self) -> dict:
        return {
            'id': self.collection_id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'createdAt': self.created_at,
        }


class Card(db.Model):
    """A front/back content pair plus its persisted scheduling state."""

    __tablename__ = 'cards'

    card_id = db.Column(db.String(36), primary_key=True, default=_new_id)
    collection_id = db.Column(
        db.String(36),
        db.ForeignKey('collections.collection_id', ondelete='CASCADE'),
        nullable=False,
    )

    # Content (Markdown)
    front = db.Column(db.Text, nullable=False)
    back = db.Column(db.Text, nullable=False)

    # Scheduling state: new | learning | review | relearning
    state = db.Column(db.String(16), nullable=False, default='new')
    due_at = db.Column(db.BigInteger, nullable=False, default=utc_now_ms)  # epoch ms
    last_interval = db.Column(db.Float, nullable=False, default=0.0)  # days
    ease_factor = db.Column(db.Float, nullable=False, default=2.5)
    reps = db.Column(db.Integer, nullable=False, default=0)
    lapses = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.BigInteger, nullable=False, default=utc_now_ms)
    updated_at = db.Column(db.BigInteger, nullable=False, default=utc_now_ms)

    __table_args__ = (
        db.Index('ix_cards_collection_due', 'collection_id', 'due_at'),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.card_id,
            'collectionId': self.collection_id,
            'front': self.front,
            'back': self.back,
            'state': self.state,
            'dueAt': self.due_at,
            'lastInterval': self.last_interval,
            'easeFactor': self.ease_factor,
            'reps': self.reps,
            'lapses': self.lapses,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def __repr__(self) -> str:
        return f'<Card {self.card_id} state={self.state} due_at={self.due_at}>'
