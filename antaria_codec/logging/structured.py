"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

This module provides a structured logger that outputs one JSON object per line.

Design:
- JSON output (compatible with log aggregators)
- Wraps Python's logging module
- Contextual metadata (region_id, point_count, etc.)
- Type-safe events (LogEvent enum)

Example:
    >>> logger = StructuredLogger(component="codec")
    >>> logger.info(
    ...     event=LogEvent.REGION_ENCODED,
    ...     message="Encoded region",
    ...     metadata={'point_count': 4}
    ... )

Output:
    {
        "timestamp": "2026-10-19T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "codec",
        "event": "region.encoded",
        "message": "Encoded region",
        "metadata": {"point_count": 4}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "codec", "library")
        logger: Underlying Python logger instance

    Example:
        >>> logger = StructuredLogger("library")
        >>> logger.warning(
        ...     event=LogEvent.RECORD_SKIPPED,
        ...     message="Skipping malformed record",
        ...     metadata={'region_id': '5f0c...'}
        ... )
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "codec")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: antaria.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"antaria.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)
            # JSON lines only; keep them out of root's plain-text handlers
            self.logger.propagate = False

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Log level name (DEBUG, INFO, WARNING, ERROR)
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception for ERROR logs
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        log_level = getattr(logging, level)
        self.logger.log(
            log_level,
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log WARNING level message.

        The exception, if given, is summarized in the JSON entry without a
        traceback.
        """
        self._log('WARNING', event, message, metadata, exc_info)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance for traceback

        Example:
            >>> try:
            ...     codec.encode(points)
            ... except EncodeError as e:
            ...     logger.error(
            ...         event=LogEvent.SERIALIZATION_ERROR,
            ...         message="Failed to encode region",
            ...         exc_info=e,
            ...     )
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """
    Formatter used by StructuredLogger.

    The message is already a JSON document; it is passed through as is.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("codec", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
