"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask, current_app, request

from .error_handlers import AuthenticationError
from .extensions import db, login_manager
from .logging_config import build_formatter, setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure application logging if no handlers are present."""

    if app.config.get("LOG_DIR"):
        setup_logging(
            app,
            log_level=app.config.get("LOG_LEVEL", "INFO"),
            log_dir=app.config["LOG_DIR"],
            json_format=app.config.get("LOG_JSON", False),
            max_bytes=app.config.get("LOG_MAX_BYTES", 10 * 1024 * 1024),
            backup_count=app.config.get("LOG_BACKUP_COUNT", 5),
        )
        return

    if app.logger.handlers:
        return

    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(app.config.get("LOG_JSON", False)))
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)


def register_identity_loader(app: Flask) -> None:
    """Resolve the caller from the identity header set by the upstream auth layer."""

    @login_manager.request_loader
    def load_user_from_request(req):
        from ..models import User

        header = current_app.config.get("IDENTITY_HEADER", "X-User-Id")
        user_id = (req.headers.get(header) or "").strip()
        if not user_id:
            return None
        return User.get_or_provision(user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        header = current_app.config.get("IDENTITY_HEADER", "X-User-Id")
        raise AuthenticationError(f"Missing caller identity header '{header}'")

    @app.before_request
    def log_request():
        current_app.logger.debug("%s %s", request.method, request.path)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (registers the mappers)

    db.create_all()
    app.logger.info("Database tables ready at %s", app.config["SQLALCHEMY_DATABASE_URI"])
