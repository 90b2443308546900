from .core import advance, check_invariants, format_interval, preview

__all__ = ['advance', 'check_invariants', 'format_interval', 'preview']
