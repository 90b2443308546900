# File: spacedeck_app/core/config.py
# Core Infrastructure Layer: environment-driven configuration

import os
from dotenv import load_dotenv

load_dotenv()

# This file lives in spacedeck_app/core/, two levels below the project root
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))

# SQLite database file used when no URI is configured
DATABASE_PATH = os.path.join(BASE_DIR, "database", "spacedeck.db")


class Config:
    """Spacedeck application configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Caller identity is supplied by the upstream authentication layer
    IDENTITY_HEADER = os.environ.get('IDENTITY_HEADER', 'X-User-Id')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_JSON = os.environ.get('LOG_JSON', '').lower() in ('1', 'true', 'yes')
    LOG_MAX_BYTES = int(os.environ.get('LOG_MAX_BYTES', 10 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.environ.get('LOG_BACKUP_COUNT', 5))

    DUE_CARDS_LIMIT = int(os.environ.get('DUE_CARDS_LIMIT', 50))
    DUE_CARDS_MAX_LIMIT = int(os.environ.get('DUE_CARDS_MAX_LIMIT', 200))

    @classmethod
    def init_app(cls, app):
        """Create the directories the configuration points at."""
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith(f'sqlite:///{BASE_DIR}'):
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if cls.LOG_DIR:
            os.makedirs(cls.LOG_DIR, exist_ok=True)
