# 📄 File: eduplatform/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a logging system that records what happens while people sign in,
# sign up and verify their email, so operators can see why something failed
# without those details ever being shown to the user.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting, contextual information and an
# authentication audit logger used by the session manager.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging

# 🔄 Connected Modules / Calls From:
# Used by: eduplatform.main (startup), session manager (auth audit trail)

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from pythonjsonlogger import jsonlogger

from eduplatform.shared.config.settings import get_settings

SERVICE_NAME = "eduplatform-auth"

_logging_configured = False


class ContextualFormatter(logging.Formatter):
    """
    Formatter that adds service and host information to log records.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'
        self.service_name = SERVICE_NAME

    def format(self, record):
        record.hostname = self.hostname
        record.service = self.service_name
        record.timestamp = datetime.now(timezone.utc).isoformat()

        if hasattr(record, 'extra_fields') and record.extra_fields:
            for key, value in record.extra_fields.items():
                setattr(record, key, value)

        return super().format(record)


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent structure for
    log aggregation tools. Fields passed via ``extra={'extra_fields': {...}}``
    are nested under ``extra``.
    """

    def __init__(self):
        super().__init__('%(levelname)s %(name)s %(message)s')
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = log_record.pop('levelname', record.levelname)
        log_record['logger'] = log_record.pop('name', record.name)
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record['extra'] = extra_fields


class SecurityLogger:
    """
    Logger for authentication events and audit trails.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_authentication(
        self,
        event_type: str,
        success: bool,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        reason: Optional[str] = None,
        extra: Dict = None
    ):
        """Log authentication events."""
        extra_fields = {
            'event_type': 'authentication',
            'auth_event': event_type,
            'success': success,
            **(extra or {})
        }

        if user_id:
            extra_fields['user_id'] = user_id
        if email:
            extra_fields['email'] = email
        if reason:
            extra_fields['reason'] = reason

        subject = user_id or email or 'anonymous'
        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"Auth {event_type} for {subject} - {'success' if success else 'failed'}",
            extra={'extra_fields': extra_fields}
        )


def setup_logging(
    log_level: str = None,
    log_format: str = None,
    log_file: str = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Level name, defaults to ``LOG_LEVEL`` from settings
        log_format: ``json`` or ``text``, defaults to ``LOG_FORMAT``
        log_file: Optional file to log to, defaults to ``LOG_FILE``
        enable_console: Whether to log to stdout

    Returns:
        The ``startup`` logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

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

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def reset_logging() -> None:
    """Allow setup_logging() to run again (used when settings change)."""
    global _logging_configured
    _logging_configured = False


def get_security_logger(name: str) -> SecurityLogger:
    """Get an authentication audit logger for a module."""
    return SecurityLogger(logging.getLogger(name))


def log_startup_event(service_name: str, version: str, extra: Dict = None):
    """Log service startup event."""
    logger = logging.getLogger("startup")
    logger.info(
        f"Starting {service_name} v{version}",
        extra={'extra_fields': {
            'event_type': 'startup',
            'service_name': service_name,
            'version': version,
            **(extra or {})
        }}
    )


def log_shutdown_event(service_name: str, extra: Dict = None):
    """Log service shutdown event."""
    logger = logging.getLogger("shutdown")
    logger.info(
        f"Shutting down {service_name}",
        extra={'extra_fields': {
            'event_type': 'shutdown',
            'service_name': service_name,
            **(extra or {})
        }}
    )
