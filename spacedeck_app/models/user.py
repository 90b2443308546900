"""User model. Credentials live in the upstream authentication layer."""

from __future__ import annotations

from flask_login import UserMixin
from sqlalchemy.exc import IntegrityError

from ..core.extensions import db
from ..utils.time_utils import utc_now_ms


class User(UserMixin, db.Model):
    """A caller known to the service, keyed by the id the auth layer supplies."""

    __tablename__ = 'users'

    user_id = db.Column(db.String(64), primary_key=True)
    created_at = db.Column(db.BigInteger, nullable=False, default=utc_now_ms)

    collections = db.relationship(
        'Collection',
        backref='owner',
        lazy=True,
        cascade='all, delete-orphan',
    )

    def get_id(self) -> str:
        return self.user_id

    @classmethod
    def get_or_provision(cls, user_id: str) -> 'User':
        """Return the user row for ``user_id``, creating it on first sight."""

        user = db.session.get(cls, user_id)
        if user is not None:
            return user

        user = cls(user_id=user_id)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Another request provisioned the same id first
            db.session.rollback()
            user = db.session.get(cls, user_id)
        return user

    def __repr__(self) -> str:
        return f'<User {self.user_id}>'
