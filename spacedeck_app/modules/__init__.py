"""Feature modules (blueprints, services and domain logic)."""
