"""
Structured logging configuration.

Called once from create_app(). Supports text (human-readable) and JSON formats
via LOG_FORMAT env var. LOG_LEVEL defaults to INFO.

APP_ENV=production drops exception tracebacks from every formatter so error
logs carry the message and its context but never a raw stack trace.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone


def _is_production():
    return os.getenv('APP_ENV', 'development').lower() == 'production'


class JSONFormatter(logging.Formatter):
    """Single-line JSON log formatter for production log aggregators."""

    def __init__(self, include_exceptions=True):
        super().__init__()
        self.include_exceptions = include_exceptions

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            if self.include_exceptions:
                entry['exception'] = self.formatException(record.exc_info)
            else:
                entry['error_type'] = record.exc_info[0].__name__
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    """Human-readable formatter; optionally omits tracebacks."""

    def __init__(self, include_exceptions=True):
        super().__init__(
            '[%(asctime)s] %(levelname)s %(name)s — %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        )
        self.include_exceptions = include_exceptions

    def format(self, record):
        if self.include_exceptions or not record.exc_info:
            return super().format(record)
        # Format a copy without exc_info so the cached traceback is not emitted
        error_type = record.exc_info[0].__name__ if record.exc_info[0] else ''
        stripped = logging.makeLogRecord(record.__dict__)
        stripped.exc_info = None
        stripped.exc_text = None
        line = super().format(stripped)
        return f'{line} [{error_type}]' if error_type else line


# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = [
    'urllib3',
    'openai',
    'httpcore',
    'httpx',
    'werkzeug',
]


def configure_logging(app=None):
    """
    Set up root logger with format/level from env vars.

    Environment variables:
        LOG_LEVEL  — Python log level name (default: INFO)
        LOG_FORMAT — "text" (default) or "json"
        APP_ENV    — "production" hides exception tracebacks
    """
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    log_format = os.getenv('LOG_FORMAT', 'text').lower()
    include_exceptions = not _is_production()

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicates on re-init
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if log_format == 'json':
        handler.setFormatter(JSONFormatter(include_exceptions=include_exceptions))
    else:
        handler.setFormatter(TextFormatter(include_exceptions=include_exceptions))

    root.addHandler(handler)

    # Quiet noisy third-party loggers
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
