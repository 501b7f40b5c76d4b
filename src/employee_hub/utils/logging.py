"""Structured logging for EmployeeHub using structlog.

Log events are rendered as JSON with ISO-8601 timestamps, the logger name and
level. Values under sensitive keys (passwords, tokens, API keys, secrets,
authorization headers) are redacted before rendering.

Environment:
- LOG_LEVEL (via settings): DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- LOG_TO_FILE: 1/true/yes enables a daily-rotated log file. Default: disabled
- LOG_FILE_DIR: directory for log files. Default: logs/

Usage:
    >>> from employee_hub.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("employee_service.list_all", count=12)
"""

import logging
import os
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping

import structlog
from structlog.types import EventDict, Processor

SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^authorization$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and any(p.match(key) for p in SENSITIVE_PATTERNS)


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Nested dictionaries are sanitized recursively.

    Example:
        >>> sanitize_for_logging({"api_key": "k-123", "employee_id": "42"})
        {'api_key': '[REDACTED]', 'employee_id': '42'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive(key):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor applying sanitize_for_logging to every event."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    # Settings may fail to load (bad env values); logging must still work then.
    try:
        from employee_hub.config.settings import get_settings

        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _should_log_to_file() -> bool:
    return os.getenv("LOG_TO_FILE", "").lower() in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"employeehub-{datetime.now().strftime('%Y%m%d')}.log"


def _configure_structlog() -> None:
    level = _get_log_level()
    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    stdout_handler = logging.StreamHandler()
    stdout_handler.setLevel(level)
    logging.root.addHandler(stdout_handler)

    if _should_log_to_file():
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=14,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with context fields already bound.

    Example:
        >>> logger = bind_context(operation="delete_by_id", employee_id="3fa8...")
        >>> logger.info("employee_service.started")
    """
    return structlog.get_logger().bind(**kwargs)
