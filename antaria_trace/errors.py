"""Trace editing errors."""


class TraceError(Exception):
    """Base class for trace editing failures."""
    pass


class InsufficientPoints(TraceError, ValueError):
    """Raised when a region is requested from fewer than 3 points."""

    def __init__(self, count: int, required: int = 3):
        self.count = count
        self.required = required
        super().__init__(
            f"A region needs at least {required} points, got {count}"
        )
