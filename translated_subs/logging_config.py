"""
Logging configuration for the translated subtitles addon.
Supports structured JSON logging for production and human-readable for development.
"""

import logging
import sys
import json
import threading
import traceback
import uuid
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = 'translated-subs'

# Extra record attributes copied into structured output
CONTEXT_FIELDS = ['request_id', 'media_id', 'media_kind', 'stage', 'language', 'error_type']


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data['exception'] = self.format_exception(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)

    def format_exception(self, exc_info) -> dict:
        """Format exception info into a structured dictionary."""
        exc_type, exc_value, exc_traceback = exc_info
        return {
            'type': exc_type.__name__,
            'message': str(exc_value),
            'traceback': traceback.format_exception(exc_type, exc_value, exc_traceback)
        }


class ColoredFormatter(logging.Formatter):
    """Colored formatter for development."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers (the JSON file handler) see the same record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"

        context_parts = []
        if hasattr(record, 'request_id'):
            context_parts.append(f"req={record.request_id[:8]}")
        if hasattr(record, 'media_id'):
            context_parts.append(f"media={record.media_id}")
        if hasattr(record, 'stage'):
            context_parts.append(f"stage={record.stage}")

        if context_parts:
            record.msg = f"[{' | '.join(context_parts)}] {record.msg}"

        return super().format(record)


def setup_logging(
    level: str = 'INFO',
    json_format: bool = False,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON format (for production)
        log_file: Optional file path for logging
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s %(levelname)s [%(name)s] %(message)s',
            datefmt='%H:%M:%S'
        ))

    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())  # Always JSON for files
        logger.addHandler(file_handler)

    # Reduce noise from other libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    return logger


def mask_api_key(api_key: Optional[str], visible_chars: int = 4) -> str:
    """
    Mask an API key for safe logging, showing only first and last few characters.

    Examples:
        mask_api_key("AIzaSy1234567890abc") -> "AIza...0abc"
        mask_api_key(None) -> "[not set]"
        mask_api_key("short") -> "*****"
    """
    if not api_key:
        return "[not set]"

    if len(api_key) <= visible_chars * 2 + 3:
        return "*" * len(api_key)

    return f"{api_key[:visible_chars]}...{api_key[-visible_chars:]}"


class LogContext:
    """Thread-local context for request tracking."""
    _thread_local = threading.local()

    @classmethod
    def _get_context(cls) -> dict:
        if not hasattr(cls._thread_local, 'context'):
            cls._thread_local.context = {}
        return cls._thread_local.context

    @classmethod
    def set(cls, **kwargs):
        cls._get_context().update(kwargs)

    @classmethod
    def get(cls, key: str, default=None):
        return cls._get_context().get(key, default)

    @classmethod
    def clear(cls):
        if hasattr(cls._thread_local, 'context'):
            cls._thread_local.context = {}

    @classmethod
    def get_all(cls) -> dict:
        return cls._get_context().copy()


def log_with_context(logger: logging.Logger, level: str, message: str, exc_info=None, **context):
    """Log with extra context fields, merged over the thread-local context."""
    full_context = {**LogContext.get_all(), **context}
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return
    if exc_info is True:
        exc_info = sys.exc_info()

    record = logger.makeRecord(
        logger.name, levelno,
        '', 0, message, (), exc_info
    )
    for key, value in full_context.items():
        setattr(record, key, value)
    logger.handle(record)


def generate_request_id() -> str:
    """Generate a unique request ID for log correlation."""
    return str(uuid.uuid4())


def setup_request_id_middleware(app):
    """
    Attach a request ID to every request.

    The ID comes from the X-Request-ID header when present, is stored in
    LogContext for the lifetime of the request and echoed back in the
    X-Request-ID response header.
    """
    from flask import request, g

    @app.before_request
    def add_request_id():
        request_id = request.headers.get('X-Request-ID') or generate_request_id()
        g.request_id = request_id
        LogContext.set(request_id=request_id)

    @app.after_request
    def add_request_id_header(response):
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        return response

    @app.teardown_request
    def clear_log_context(exception=None):
        LogContext.clear()
