from .api import scheduling_api_bp

__all__ = ['scheduling_api_bp']
