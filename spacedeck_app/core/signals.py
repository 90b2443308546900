"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker to enable decoupled communication between modules.

Usage:
    # Publisher (sender)
    from spacedeck_app.core.signals import content_created
    content_created.send(None, user_id='...', content_type='card', content_id='...')

    # Subscriber (receiver)
    @content_created.connect
    def on_content_created(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Content Management Signals
# ============================================
content_signals = Namespace()

# Signal: Fired when a collection or card is created
# Payload: user_id, content_type ('collection', 'card'), content_id, title (optional)
content_created = content_signals.signal('content_created')

# Signal: Fired when a collection or card is deleted
# Payload: user_id, content_type, content_id
content_deleted = content_signals.signal('content_deleted')
