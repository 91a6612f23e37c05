"""Domain exception hierarchy for event channels."""

from __future__ import annotations


class EventChannelError(RuntimeError):
    """Base class for all errors raised by this package."""


class ConfigValidationError(EventChannelError):
    """Raised when configuration cannot be validated safely."""
