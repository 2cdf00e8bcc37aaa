"""
Structured Logging for Antaria
==============================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from antaria_codec.logging import create_logger, LogEvent
    >>> logger = create_logger("library")
    >>> logger.info(
    ...     event=LogEvent.REGIONS_LOADED,
    ...     message="Loaded regions",
    ...     metadata={'loaded': 4, 'skipped': 1}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
