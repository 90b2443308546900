from .card_service import CardService
from .collection_service import CollectionService

__all__ = ['CardService', 'CollectionService']
