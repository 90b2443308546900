"""
Logging setup for Spacedeck.

``app.logger`` is the ``spacedeck_app`` logger, and every module logs through
``logging.getLogger(__name__)`` below it. Handlers attached here therefore
receive review, content and request logs alike.

Two layouts are supported:
- text lines for local development
- one JSON object per line for log shippers
"""

import json
import logging
import logging.handlers
import os
from typing import Optional

LOGGER_NAME = 'spacedeck_app'
LOG_FILENAME = 'spacedeck.log'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


class JsonLineFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': self.formatTime(record, DATE_FORMAT),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def build_formatter(json_format: bool = False) -> logging.Formatter:
    if json_format:
        return JsonLineFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def _reset_handlers(logger: logging.Logger) -> None:
    # create_app may run several times per process (tests, reloader)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    app=None,
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
    json_format: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Attach console and rotating file handlers to the ``spacedeck_app`` logger.

    Args:
        app: Flask application; when given, werkzeug request noise is muted
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for ``spacedeck.log`` (default: <project>/logs)
        json_format: Emit JSON lines instead of text
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files kept

    Returns:
        The configured logger
    """
    if log_dir is None:
        base_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
        log_dir = os.path.join(base_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = build_formatter(json_format)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILENAME),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8',
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if app is not None:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info("Logging initialized: level=%s, file=%s", logging.getLevelName(level), file_handler.baseFilename)
    return logger
