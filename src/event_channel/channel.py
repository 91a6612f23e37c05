"""Synchronous in-process event channels.

Usage:
    class Connection:
        def __init__(self) -> None:
            self._connected: EventChannel[EventArgs] = EventChannel("connected")

        @property
        def connected(self) -> Event[EventArgs]:
            return self._connected

        def open(self) -> None:
            ...
            self._connected.dispatch(self, EMPTY_ARGS)

        def close(self) -> None:
            self._connected.dispose()

    def on_connected(sender, args):
        print(f"{sender} is up")

    conn = Connection()
    conn.connected.subscribe(on_connected)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
import types
from typing import Any, Generic, Protocol, TypeVar

LOGGER = logging.getLogger(__name__)

_BOUND_METHOD_TYPES = (
    types.MethodType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
)

# Contexts of these types match by value; everything else by identity.
_VALUE_CONTEXT_TYPES = (int, float, complex, str, bytes, bool, type(None))

TArgs = TypeVar("TArgs")

EventHandler = Callable[..., Any]


class _NoContext:
    """Marker for registrations made without a context."""

    def __repr__(self) -> str:
        return "NO_CONTEXT"


NO_CONTEXT: Any = _NoContext()

_default_warning_threshold = 0


def set_subscriber_warning_threshold(threshold: int) -> None:
    """Set the growth warning threshold for channels created afterwards.

    Zero disables the warning.
    """
    global _default_warning_threshold
    if threshold < 0:
        raise ValueError(f"threshold must not be negative, got {threshold}")
    _default_warning_threshold = threshold


def get_subscriber_warning_threshold() -> int:
    """Return the threshold applied to channels created without one."""
    return _default_warning_threshold


@dataclass(frozen=True)
class EventArgs:
    """Base payload for events; subclass as a frozen dataclass to add data."""


EMPTY_ARGS = EventArgs()


class Event(Protocol[TArgs]):
    """Subscription surface an owner exposes to outside callers."""

    def subscribe(self, handler: EventHandler, context: Any = NO_CONTEXT) -> None: ...

    def unsubscribe(self, handler: EventHandler, context: Any = NO_CONTEXT) -> None: ...


class Disposable(Protocol):
    """Objects holding references that must be released explicitly."""

    def dispose(self) -> None: ...


class EventEmitter(Event[TArgs], Disposable, Protocol[TArgs]):
    """Full channel surface used by the owning object."""

    def dispatch(self, sender: Any, args: TArgs) -> None: ...


def _same_handler(left: EventHandler, right: EventHandler) -> bool:
    if left is right:
        return True
    # Bound methods are rebuilt on each attribute access.
    if isinstance(left, _BOUND_METHOD_TYPES) and type(left) is type(right):
        return left.__self__ is right.__self__ and left == right
    return False


def _same_context(left: Any, right: Any) -> bool:
    if left is right:
        return True
    # True and 1 stay distinct.
    if type(left) is type(right) and isinstance(left, _VALUE_CONTEXT_TYPES):
        return left == right
    return False


@dataclass
class _Registration:
    handler: EventHandler
    contexts: list[Any] = field(default_factory=list)

    def index_of(self, context: Any) -> int:
        for index, candidate in enumerate(self.contexts):
            if _same_context(candidate, context):
                return index
        return -1


class EventChannel(Generic[TArgs]):
    """A single named signal with an ordered registry of subscribers.

    Each subscription is a (handler, context) pair. The same handler may be
    subscribed under several contexts; subscribing without a context is its
    own registration and never merges with context-bound ones.

    Handlers run synchronously on ``dispatch``, grouped by the order in which
    each handler was first subscribed and then by context registration order.
    A handler registered without a context is called as
    ``handler(sender, args)``; one registered with a context is called as
    ``handler(context, sender, args)``.

    The registry is not synchronized. Hosts sharing a channel between threads
    must serialize access themselves.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        subscriber_warning_threshold: int | None = None,
    ) -> None:
        """Create an empty channel.

        Args:
            name: Optional label used in log lines
            subscriber_warning_threshold: Log a warning once the number of
                subscriptions exceeds this value (0 disables). Defaults to
                the module-wide threshold.
        """
        self.name = name
        if subscriber_warning_threshold is None:
            subscriber_warning_threshold = _default_warning_threshold
        if subscriber_warning_threshold < 0:
            raise ValueError(
                "subscriber_warning_threshold must not be negative, "
                f"got {subscriber_warning_threshold}"
            )
        self._warning_threshold = subscriber_warning_threshold
        self._registrations: list[_Registration] = []
        self._warned = False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"subscribers={self.subscriber_count})"
        )

    @property
    def subscriber_count(self) -> int:
        """Number of (handler, context) pairs currently registered."""
        return sum(len(reg.contexts) for reg in self._registrations)

    def is_subscribed(self, handler: EventHandler, context: Any = NO_CONTEXT) -> bool:
        """Return True when the exact (handler, context) pair is registered."""
        registration = self._find(handler)
        return registration is not None and registration.index_of(context) >= 0

    def subscribe(self, handler: EventHandler, context: Any = NO_CONTEXT) -> None:
        """Add a handler to be called when this channel dispatches.

        Subscribing a pair that is already registered does nothing. Keep a
        reference to ``handler``: an inline lambda can never be unsubscribed.

        Args:
            handler: Callable receiving ``(sender, args)``, or
                ``(context, sender, args)`` when a context is given
            context: Receiver passed to the handler as its first argument
        """
        registration = self._find(handler)
        if registration is None:
            registration = _Registration(handler)
            self._registrations.append(registration)
        elif registration.index_of(context) >= 0:
            return
        registration.contexts.append(context)
        LOGGER.debug("Subscribed %r to channel %s", handler, self._label)
        self._check_growth()

    def unsubscribe(self, handler: EventHandler, context: Any = NO_CONTEXT) -> None:
        """Remove exactly the (handler, context) pair, if registered.

        Omitting ``context`` only removes the registration made without one.
        Removal during a dispatch takes effect from the next dispatch.
        """
        registration = self._find(handler)
        if registration is None:
            return
        index = registration.index_of(context)
        if index < 0:
            return
        del registration.contexts[index]
        if not registration.contexts:
            self._registrations.remove(registration)
        if self._warned and self.subscriber_count <= self._warning_threshold:
            self._warned = False
        LOGGER.debug("Unsubscribed %r from channel %s", handler, self._label)

    def dispatch(self, sender: Any, args: TArgs) -> None:
        """Call every handler registered when the dispatch starts.

        Handlers subscribed or unsubscribed while the pass runs do not change
        who receives it. An exception raised by a handler propagates to the
        caller unchanged and the remaining handlers of the pass are skipped.

        Args:
            sender: Object raising the event
            args: Event payload
        """
        snapshot = [
            (registration.handler, context)
            for registration in self._registrations
            for context in registration.contexts
        ]
        for handler, context in snapshot:
            if context is NO_CONTEXT:
                handler(sender, args)
            else:
                handler(context, sender, args)

    def dispose(self) -> None:
        """Release all references to handlers and contexts.

        The channel stays usable; later subscriptions are honored.
        """
        self._registrations = []
        self._warned = False
        LOGGER.debug("Disposed channel %s", self._label)

    @property
    def _label(self) -> str:
        return self.name or f"<unnamed {id(self):#x}>"

    def _find(self, handler: EventHandler) -> _Registration | None:
        for registration in self._registrations:
            if _same_handler(registration.handler, handler):
                return registration
        return None

    def _check_growth(self) -> None:
        if not self._warning_threshold or self._warned:
            return
        count = self.subscriber_count
        if count > self._warning_threshold:
            self._warned = True
            LOGGER.warning(
                "Channel %s has %d subscribers (threshold %d); "
                "handlers may not be getting unsubscribed",
                self._label,
                count,
                self._warning_threshold,
            )
