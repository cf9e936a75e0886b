"""Logging configuration for the application."""

import json
import logging
import logging.config
import sys
import uuid
from contextvars import ContextVar
from typing import Dict, Any, Optional

from .settings import settings

# Context variable for correlation ID
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName', 'message',
    'exc_info', 'exc_text', 'stack_info', 'correlation_id',
    'address_id', 'operation', 'error',
])


class CorrelationIdFormatter(logging.Formatter):
    """Formatter that includes the correlation ID in log records."""

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = correlation_id.get() or "N/A"
        return super().format(record)


class StructuredFormatter(CorrelationIdFormatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line."""
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": correlation_id.get() or "N/A",
            "message": record.getMessage(),
        }

        for key in ('address_id', 'operation', 'error'):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_entry[key] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration based on settings."""

    if settings.log_format == "json":
        formatter_config = {
            "()": "address_service.config.logging.StructuredFormatter",
            "datefmt": "%Y-%m-%dT%H:%M:%S"
        }
    else:
        formatter_config = {
            "()": "address_service.config.logging.CorrelationIdFormatter",
            "format": "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S"
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": formatter_config,
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
                "level": settings.log_level,
            },
        },
        "root": {
            "level": settings.log_level,
            "handlers": ["console"],
        },
        "loggers": {
            "address_service": {
                "level": settings.log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "INFO" if settings.database_echo else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging() -> None:
    """Setup logging configuration."""
    logging.config.dictConfig(get_logging_config())


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(corr_id: str) -> None:
    """Set correlation ID in context."""
    correlation_id.set(corr_id)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return correlation_id.get()


class LoggingService:
    """Service for consistent logging across the application."""

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)

    def log_operation(self, level: str, message: str, address_id: Optional[str] = None,
                      operation: Optional[str] = None, error: Optional[str] = None, **kwargs) -> None:
        """Log operation with consistent format.

        Args:
            level: Log level (info, warning, error, debug)
            message: Log message
            address_id: Address identifier involved in the operation
            operation: Operation name
            error: Error message if applicable
            **kwargs: Additional fields to log
        """
        extra = {}
        if address_id:
            extra['address_id'] = address_id
        if operation:
            extra['operation'] = operation
        if error:
            extra['error'] = error

        extra.update(kwargs)

        log_method = getattr(self.logger, level.lower())
        log_method(message, extra=extra)

    def log_crud_operation(self, operation: str, address_id: Optional[str], success: bool,
                           error: Optional[str] = None, **kwargs) -> None:
        """Log CRUD operation with standard format.

        A failure without an error message (e.g. a missing row) is logged
        as a warning, a failure carrying an error as an error.
        """
        if success:
            self.log_operation(
                "info",
                f"{operation.capitalize()} operation completed successfully",
                address_id=address_id,
                operation=operation,
                **kwargs
            )
        else:
            self.log_operation(
                "error" if error else "warning",
                f"{operation.capitalize()} operation failed",
                address_id=address_id,
                operation=operation,
                error=error,
                **kwargs
            )

    def log_error(self, message: str, error: Exception, address_id: Optional[str] = None,
                  operation: Optional[str] = None, **kwargs) -> None:
        """Log error with its type and text."""
        self.log_operation(
            "error",
            message,
            address_id=address_id,
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **kwargs
        )
