"""Database models package for Spacedeck."""

from ..core.extensions import db

from .user import User
from .learning import Card, Collection

__all__ = [
    'db',
    'User',
    'Collection',
    'Card',
]
