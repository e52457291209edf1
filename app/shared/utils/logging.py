# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a smart logging system that records what happens in the app in a structured way,
# making it easy to see which upload or weather request did what and how long it took.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting (python-json-logger), request-scoped context
# via contextvars, and a thin StructuredLogger wrapper that accepts extra fields per call.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), request logging middleware, upload service, image normalizer,
# weather provider client, weather-care service, storage backends

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from app.shared.config.settings import get_settings

SERVICE_NAME = "greenmate-api"

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# Global logging configuration
_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


class ContextualFormatter(logging.Formatter):
    """
    Plain-text formatter that adds request ID and service information
    to every record before formatting.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent structure for
    log aggregation tools. Fields passed through StructuredLogger
    land under ``extra``.
    """

    def __init__(self):
        super().__init__(
            '%(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'name': 'logger'},
            json_ensure_ascii=False,
        )
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        extra_fields = getattr(record, 'extra_fields', None)
        super().add_fields(log_record, record, message_dict)

        log_record.pop('extra_fields', None)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname

        request_id = request_id_var.get('')
        if request_id:
            log_record['request_id'] = request_id
        if extra_fields:
            log_record['extra'] = extra_fields


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Keyword arguments other than the standard logging ones are collected
    into ``extra_fields`` so call sites can attach context cheaply.
    """

    _passthrough = ('exc_info', 'stack_info', 'stacklevel')

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Optional[Dict] = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def critical(self, message: str, extra: Optional[Dict] = None, exc_info: bool = False, **kwargs):
        self._log(logging.CRITICAL, message, extra, exc_info=exc_info, **kwargs)

    def log(self, level: int, message: str, extra: Optional[Dict] = None, **kwargs):
        self._log(level, message, extra, **kwargs)

    def _log(self, level: int, message: str, extra: Optional[Dict] = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in self._passthrough:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items() if k in self._passthrough}
        # Account for this wrapper so funcName/lineno point at the caller
        clean_kwargs.setdefault('stacklevel', 3)

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True,
    force: bool = False
) -> logging.Logger:
    """
    Setup application logging configuration.

    Configures the root logger once per process; later calls are no-ops
    unless ``force`` is given.

    Args:
        log_level: Level name, defaults to settings.LOG_LEVEL
        log_format: 'json' or 'text', defaults to settings.LOG_FORMAT
        log_file: Optional file path, defaults to settings.LOG_FILE
        enable_console: Whether to log to stdout

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger

    return logger


@contextmanager
def log_context(request_id: Optional[str] = None):
    """
    Context manager binding a request ID to every log line emitted inside it.

    Args:
        request_id: Request identifier, generated when omitted
    """
    if request_id is None:
        request_id = str(uuid4())

    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)
