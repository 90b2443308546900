from .api import content_api_bp

__all__ = ['content_api_bp']
