"""
antaria_session - Interactive tracing session

Bounded Context: Input events -> trace edits -> saved regions
Responsibilities:
  - Session configuration (YAML)
  - Input event registration and dispatch
  - Save/delete/reload orchestration with failure-safe trace handling

Architecture:
  - TracerConfig: frozen, validated configuration
  - EventRegistry: explicit event registration (fail-fast on unknown events)
  - EditingSession: owns TraceBuilder + RegionLibrary

Design Philosophy:
  - Explicit registration (no runtime surprises)
  - A failed save never loses the user's trace
  - Single-threaded: one event at a time, no locks
"""

from .config import ConfigError, StoreConfig, TracerConfig
from .registry import EventNotAvailableError, EventRegistry
from .session import EditingSession

__all__ = [
    "ConfigError",
    "StoreConfig",
    "TracerConfig",
    "EventNotAvailableError",
    "EventRegistry",
    "EditingSession",
]
