import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from spacedeck_app import create_app, db
from spacedeck_app.core.config import Config
from spacedeck_app.models import Card, Collection, User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_DIR = None
    LOG_LEVEL = 'WARNING'


USER_ID = 'user-1'
T0 = 1_700_000_000_000  # fixed review clock, epoch ms


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {'X-User-Id': USER_ID}


@pytest.fixture
def collection(app):
    user = User.get_or_provision(USER_ID)
    collection = Collection(user_id=user.user_id, title='Spanish verbs')
    db.session.add(collection)
    db.session.commit()
    return collection


@pytest.fixture
def make_card(collection):
    """Factory for cards with an explicit scheduling state."""

    def _make_card(**fields):
        values = {
            'collection_id': collection.collection_id,
            'front': 'hablar',
            'back': 'to speak',
            'state': 'new',
            'due_at': T0,
            'last_interval': 0.0,
            'ease_factor': 2.5,
            'reps': 0,
            'lapses': 0,
            'created_at': T0,
            'updated_at': T0,
        }
        values.update(fields)
        card = Card(**values)
        db.session.add(card)
        db.session.commit()
        return card

    return _make_card
