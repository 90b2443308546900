"""Collection and card management."""
