"""
Logging configuration for NoteKeep backend.

Console output is colored in debug mode and JSON otherwise. Rotating file
handlers are added when ``log_dir`` is set. Every record passes through
``SensitiveDataFilter`` so tokens and passwords never reach a handler.
"""
import json
import logging
import logging.config
import re
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from collections.abc import Mapping
from typing import Any, Dict, Optional

_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName', 'created', 'msecs',
    'relativeCreated', 'thread', 'threadName', 'processName', 'process', 'taskName',
    'message', 'asctime',
))

REDACTED = "***REDACTED***"

SENSITIVE_PATTERNS = [
    (re.compile(r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"((?:access|refresh)?_?token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})(['\"]?)", re.IGNORECASE),
     rf"\1{REDACTED}\3"),
    (re.compile(r"(password\s*[:=]\s*['\"]?)([^'\"\s,}]+)(['\"]?)", re.IGNORECASE), rf"\1{REDACTED}\3"),
    (re.compile(r"(secret\s*[:=]\s*['\"]?)([^'\"\s,}]+)(['\"]?)", re.IGNORECASE), rf"\1{REDACTED}\3"),
    (re.compile(r"(authorization\s*:\s*['\"]?)([^'\"]{10,})(['\"]?)", re.IGNORECASE), rf"\1{REDACTED}\3"),
    # credentials inside database / redis URLs
    (re.compile(r"([a-z0-9+]+://[^:/@\s]+):([^@\s]+)@"), rf"\1:{REDACTED}@"),
]

_SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "cookie")


def sanitize_message(message: str) -> str:
    """Mask credentials that show up in free text."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SensitiveDataFilter(logging.Filter):
    """Redacts secrets from the message and from ``extra`` fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = sanitize_message(record.msg)
        if isinstance(record.args, Mapping):
            record.args = {
                k: sanitize_message(v) if isinstance(v, str) else v
                for k, v in record.args.items()
            }
        elif record.args:
            record.args = tuple(
                sanitize_message(a) if isinstance(a, str) else a
                for a in (record.args if isinstance(record.args, tuple) else (record.args,))
            )
        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_ATTRS:
                continue
            if any(s in key.lower() for s in _SENSITIVE_KEYS):
                setattr(record, key, REDACTED)
            elif isinstance(value, str):
                setattr(record, key, sanitize_message(value))
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            log_entry['extra'] = extra

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        # work on a copy, other handlers share the record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{self.BOLD}{record.levelname}{self.RESET}"
        record.name = f"\033[90m{record.name}{self.RESET}"
        return super().format(record)


def get_log_level(level_str: Optional[str]) -> int:
    """Map a level name to its logging constant, INFO when unknown."""
    levels = {
        'CRITICAL': logging.CRITICAL,
        'ERROR': logging.ERROR,
        'WARNING': logging.WARNING,
        'INFO': logging.INFO,
        'DEBUG': logging.DEBUG,
    }
    return levels.get((level_str or 'INFO').upper(), logging.INFO)


def build_logging_config(settings) -> Dict[str, Any]:
    """Build the dictConfig for the given settings."""
    level = get_log_level(settings.log_level)
    handlers: Dict[str, Any] = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'colored' if settings.debug else 'json',
            'filters': ['sensitive'],
            'stream': sys.stdout,
            'level': level,
        },
    }
    app_handlers = ['console']

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(log_dir / 'notekeep.log'),
            'maxBytes': 10_000_000,
            'backupCount': 5,
            'formatter': 'file',
            'filters': ['sensitive'],
            'level': 'DEBUG',
        }
        handlers['error_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(log_dir / 'error.log'),
            'maxBytes': 10_000_000,
            'backupCount': 5,
            'formatter': 'json',
            'filters': ['sensitive'],
            'level': 'ERROR',
        }
        app_handlers = ['console', 'file', 'error_file']

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'sensitive': {'()': SensitiveDataFilter},
        },
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
            'file': {
                'format': '%(asctime)s | %(levelname)-8s | %(name)-25s | %(funcName)-20s:%(lineno)-4d | %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': handlers,
        'loggers': {
            'notekeep': {
                'handlers': app_handlers,
                'level': 'DEBUG' if settings.debug else level,
                'propagate': False,
            },
            'uvicorn': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'uvicorn.access': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'sqlalchemy': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
        },
    }


def setup_logging(settings) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(settings))

    get_logger('logging').info("Logging system initialized", extra={
        'log_level': settings.log_level,
        'debug': settings.debug,
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``notekeep`` namespace."""
    return logging.getLogger(f"notekeep.{name}")


class LoggingMiddleware:
    """ASGI middleware logging one line per request and response."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request_id = uuid.uuid4().hex[:12]
        client = scope.get('client')

        self.logger.info("HTTP Request", extra={
            'request_id': request_id,
            'method': scope['method'],
            'path': scope['path'],
            'client_ip': client[0] if client else 'unknown',
        })

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                self.logger.info("HTTP Response", extra={
                    'request_id': request_id,
                    'status_code': message.get('status', 0),
                    'duration_ms': round((time.perf_counter() - start) * 1000, 2),
                    'method': scope['method'],
                    'path': scope['path'],
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                'request_id': request_id,
                'method': scope['method'],
                'path': scope['path'],
                'duration_ms': round((time.perf_counter() - start) * 1000, 2),
                'exception_type': type(exc).__name__,
            })
            raise
