"""
EventRegistry - Explicit input event registration

Bounded Context: Input event routing
Responsibilities:
  - Register input events with handlers
  - Validate event existence before dispatch
  - Provide introspection (available_events, get_help)

Design Motivation:
  Problem: An implicit if/elif chain hides which gestures a session accepts
  Solution: Explicit registration pattern

Threading: Single-threaded. The input event source serializes dispatch,
so the registry holds no lock.
"""

from typing import Any, Callable, Dict, Set


class EventNotAvailableError(Exception):
    """Raised when dispatching an unregistered input event"""
    pass


class EventRegistry:
    """
    Registry for input events with explicit registration.

    Key Features:
      - Fail-fast: Unknown events rejected immediately
      - Introspection: Can query available events at runtime
      - Self-Documenting: Each event has a description

    Example:
        registry = EventRegistry()
        registry.register('tap', session.tap, "Add a vertex")
        registry.register('undo', session.undo, "Remove the last vertex")

        registry.dispatch('tap', point)
        registry.dispatch('undo')
    """

    def __init__(self):
        self._handlers: Dict[str, Callable] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, event: str, handler: Callable, description: str) -> None:
        """
        Register an event with its handler function.

        Args:
            event: Event name (lowercase, no spaces)
            handler: Callable that handles the event
            description: Human-readable description for help text

        Raises:
            ValueError: If event already registered (double registration)
        """
        if event in self._handlers:
            raise ValueError(f"Event '{event}' already registered")

        self._handlers[event] = handler
        self._descriptions[event] = description

    def dispatch(self, event: str, payload: Any = None) -> Any:
        """
        Dispatch a registered event.

        Args:
            event: Event name
            payload: Optional event data (e.g. a GeoPoint)

        Returns:
            Whatever the handler returns

        Raises:
            EventNotAvailableError: If event not registered
        """
        if event not in self._handlers:
            raise EventNotAvailableError(
                f"Event '{event}' not available. "
                f"Available events: {', '.join(sorted(self.available_events))}"
            )

        handler = self._handlers[event]

        if payload is not None:
            return handler(payload)
        return handler()

    def is_available(self, event: str) -> bool:
        """Check if event is registered."""
        return event in self._handlers

    @property
    def available_events(self) -> Set[str]:
        """Snapshot of all registered event names."""
        return set(self._handlers.keys())

    def get_help(self) -> Dict[str, str]:
        """Copy of event descriptions."""
        return dict(self._descriptions)

    def count(self) -> int:
        """Number of registered events."""
        return len(self._handlers)
