"""Top-level package for event-channel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .channel import (
        EMPTY_ARGS,
        NO_CONTEXT,
        Disposable,
        Event,
        EventArgs,
        EventChannel,
        EventEmitter,
        EventHandler,
        set_subscriber_warning_threshold,
    )
    from .config import load_config
    from .exceptions import ConfigValidationError, EventChannelError
    from .logging_utils import configure_logging
    from .runtime import configure

__all__ = [
    "ConfigValidationError",
    "Disposable",
    "EMPTY_ARGS",
    "Event",
    "EventArgs",
    "EventChannel",
    "EventChannelError",
    "EventEmitter",
    "EventHandler",
    "NO_CONTEXT",
    "configure",
    "configure_logging",
    "load_config",
    "set_subscriber_warning_threshold",
]

_CHANNEL_EXPORTS = {
    "Disposable",
    "EMPTY_ARGS",
    "Event",
    "EventArgs",
    "EventChannel",
    "EventEmitter",
    "EventHandler",
    "NO_CONTEXT",
    "set_subscriber_warning_threshold",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols so that the channel core loads without pydantic."""
    if name in _CHANNEL_EXPORTS:
        from . import channel

        return getattr(channel, name)
    if name in {"ConfigValidationError", "EventChannelError"}:
        from .exceptions import ConfigValidationError, EventChannelError

        return {
            "ConfigValidationError": ConfigValidationError,
            "EventChannelError": EventChannelError,
        }[name]
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    if name == "configure":
        from .runtime import configure

        return configure
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
