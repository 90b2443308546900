"""
Centralized Default Configuration for Spacedeck.

This file serves as the "Source of Truth" for application settings.
These values are used as fallbacks when a key is missing from the Flask config.
"""

from typing import Any

from flask import current_app, has_app_context

DEFAULT_APP_CONFIGS = {
    # --- Due-set selection ---
    'DUE_CARDS_LIMIT': 50,
    'DUE_CARDS_MAX_LIMIT': 200,

    # --- Identity ---
    'IDENTITY_HEADER': 'X-User-Id',
}


def get_setting(key: str, default: Any = None) -> Any:
    """Read a setting from the active app config, falling back to the defaults."""
    if has_app_context() and key in current_app.config:
        return current_app.config[key]
    return DEFAULT_APP_CONFIGS.get(key, default)
