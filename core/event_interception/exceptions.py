"""
Event Interception Exceptions.

This module defines the structured exception hierarchy for the interception
adapter. Every error raised by the package inherits from InterceptionError,
and each concrete error also derives from the matching builtin so callers
catching ValueError or TypeError keep working.
"""


class InterceptionError(Exception):
    """Base exception for all event interception errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidSubjectError(InterceptionError, ValueError):
    """Raised when the subject is missing or cannot register event handlers."""
    pass


class InvalidEventNameError(InterceptionError, ValueError):
    """Raised when the requested event names are not a sequence of strings."""
    pass


class InvalidHandlerError(InterceptionError, TypeError):
    """Raised when a non-callable is attached as an event handler."""
    pass


class ConfigurationError(InterceptionError, ValueError):
    """Raised when the interceptor configuration holds an unusable value."""
    pass
