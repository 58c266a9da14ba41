"""
Structured logging configuration for the DealerSite content API.

JSON lines in production (gunicorn or PRODUCTION=true), coloured single
lines during local development.
"""

import os
import sys
import json
import logging
from datetime import datetime, timezone

from flask import g, has_request_context


# Request-scoped record attributes set by AdminContextFilter
ADMIN_FIELDS = ('admin_id', 'admin')


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for gunicorn / PRODUCTION=true."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'source': f'{record.module}.{record.funcName}:{record.lineno}',
        }
        for name in ADMIN_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Coloured single line per record for a local terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: 36,
        logging.INFO: 32,
        logging.WARNING: 33,
        logging.ERROR: 31,
        logging.CRITICAL: 35,
    }

    def __init__(self):
        super().__init__('%(asctime)s %(levelname)-8s %(name)s: %(message)s', datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        admin = getattr(record, 'admin', None)
        if admin:
            head, sep, tail = text.partition('\n')
            text = f'{head} [admin={admin}]{sep}{tail}'
        code = self.LEVEL_COLORS.get(record.levelno)
        return f'\033[{code}m{text}\033[0m' if code else text


def setup_logging(
    level: str = 'INFO',
    json_format: bool = None,
    logger_name: str = 'dealersite'
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting. If None, auto-detects based on environment.
        logger_name: Name for the logger instance.

    Returns:
        Configured logger instance.
    """
    if json_format is None:
        json_format = os.environ.get('PRODUCTION', '').lower() == 'true' or \
                      'gunicorn' in os.environ.get('SERVER_SOFTWARE', '')

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates when the factory runs twice
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logger.level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    handler.addFilter(AdminContextFilter())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = 'dealersite') -> logging.Logger:
    """Get a logger instance. Creates child logger if name contains dots."""
    return logging.getLogger(name)


class AdminContextFilter(logging.Filter):
    """Attach the acting admin (``flask.g.admin``) to records logged inside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            admin = getattr(g, 'admin', None)
            if admin:
                record.admin_id = admin.get('id')
                record.admin = admin.get('username')
        return True
