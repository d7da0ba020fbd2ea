"""
Marmoraria Control - Structured Logging Configuration

Provides JSON-formatted logging for log aggregation.
Includes separate audit logging for stock movements and account events.

Usage:
    from marmoraria.logging_config import get_logger, audit_log

    logger = get_logger(__name__)
    logger.info("Registering cut", extra={"slab_id": "CHP-1A2B3C4D"})

    # For business events requiring audit trail
    audit_log("SLAB_CUT_REGISTERED", user_id="USR-1", resource_id="CHP-1A2B3C4D")
"""
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from marmoraria.core.settings import settings


# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON for log aggregation systems.

    Output format:
    {
        "timestamp": "2024-01-01T12:00:00.000Z",
        "level": "INFO",
        "logger": "marmoraria.services.slab_service",
        "message": "Cut registered",
        "slab_id": "CHP-1A2B3C4D",
        ...
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.ERROR:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data)


class TextFormatter(logging.Formatter):
    """
    Formats log records as human-readable text for development.

    Output format:
    2024-01-01 12:00:00 [INFO] marmoraria.services.slab_service: Cut registered slab_id=CHP-1A2B3C4D
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        base_msg = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"

        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        ]
        if extras:
            base_msg += " " + " ".join(extras)

        if record.exc_info:
            base_msg += "\n" + self.formatException(record.exc_info)

        return base_msg


class AuditFormatter(logging.Formatter):
    """
    Formats audit log records.

    Output format (JSON):
    {
        "timestamp": "2024-01-01T12:00:00.000Z",
        "event": "SLAB_CUT_REGISTERED",
        "user_id": "USR-1",
        "company_id": "COMP-1",
        "resource_type": "slab",
        "resource_id": "CHP-1A2B3C4D",
        "details": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": getattr(record, "event", record.getMessage()),
            "user_id": getattr(record, "user_id", None),
            "company_id": getattr(record, "company_id", None),
            "resource_type": getattr(record, "resource_type", None),
            "resource_id": getattr(record, "resource_id", None),
            "details": getattr(record, "details", {}),
        }

        log_data = {k: v for k, v in log_data.items() if v is not None}

        return json.dumps(log_data, default=str)


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def setup_logging() -> None:
    """
    Configure application logging based on settings.

    Call this once at application startup.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    log_format = settings.LOG_FORMAT.lower()

    if log_format == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        _ensure_parent_dir(settings.LOG_FILE)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    setup_audit_logging()

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def setup_audit_logging() -> None:
    """Configure separate audit logger for stock and account events."""
    audit_logger = logging.getLogger("audit")
    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()
    audit_logger.propagate = False

    if settings.AUDIT_LOG_FILE:
        _ensure_parent_dir(settings.AUDIT_LOG_FILE)
        audit_handler = logging.handlers.RotatingFileHandler(
            settings.AUDIT_LOG_FILE,
            maxBytes=50 * 1024 * 1024,  # 50 MB
            backupCount=10,
        )
        audit_handler.setFormatter(AuditFormatter())
        audit_handler.setLevel(logging.INFO)
        audit_logger.addHandler(audit_handler)

    if settings.DEBUG:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(AuditFormatter())
        audit_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Usage:
        logger = get_logger(__name__)
        logger.info("Something happened", extra={"key": "value"})
    """
    return logging.getLogger(name)


def audit_log(
    event: str,
    *,
    user_id: Optional[str] = None,
    company_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[Any] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a business event to the audit log.

    Used for:
    - Account events (company registered, login, team member added)
    - Stock movements (entry, cut, withdrawal, restock, supply adjustments)
    - Platform actions (company suspended, fee changed)

    Args:
        event: Event name (e.g., "SLAB_CUT_REGISTERED", "USER_LOGIN")
        user_id: ID of the user who triggered the event
        company_id: Tenant the event belongs to
        resource_type: Type of resource affected (e.g., "slab", "supply")
        resource_id: ID of the affected resource
        details: Additional event-specific data
    """
    audit_logger = logging.getLogger("audit")
    audit_logger.info(
        event,
        extra={
            "event": event,
            "user_id": user_id,
            "company_id": company_id,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "details": details or {},
        },
    )
