"""Errors raised by the engine for invalid input.

Blocked slots, unresolved tiers and exhausted suggestions are normal
results and are never raised.
"""


class SchedulingError(Exception):
    """Base class for all engine input errors."""


class InvalidDurationError(SchedulingError, ValueError):
    """Raised when a requested duration is non-positive, off-step, or out of range."""


class InvalidIntervalError(SchedulingError, ValueError):
    """Raised when a span is inverted, off the half-hour grid, or crosses midnight."""


class RateTierConfigError(SchedulingError, ValueError):
    """Raised when a rate tier row cannot be loaded."""
