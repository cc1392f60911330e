"""
Component - Minimal host for named events.

A component declares events as methods whose names start with ``on``
(``on_save``, ``onLoad``). Each such method usually just forwards to
``raise_event`` with its own name:

    class Document(Component):
        def on_save(self, event: Event) -> None:
            self.raise_event("on_save", event)

Handlers are plain callables taking the event. They run synchronously, in
the order they were attached, inside the call that raised the event.
"""

import logging
from collections import defaultdict
from typing import Any, Callable

from event_interception.exceptions import InvalidHandlerError

logger = logging.getLogger(__name__)

# Type for event handlers
EventHandler = Callable[[Any], None]


class Component:
    """Base class for objects that raise named events."""

    def __init__(self) -> None:
        self._event_handlers: defaultdict[str, list[EventHandler]] = defaultdict(list)

    def _handlers(self) -> defaultdict[str, list[EventHandler]]:
        # Subclasses that skip __init__ still get a registry.
        try:
            return self._event_handlers
        except AttributeError:
            self._event_handlers = defaultdict(list)
            return self._event_handlers

    def has_event(self, name: str, prefix: str = "on") -> bool:
        """Check whether the component defines an event method called ``name``.

        ``prefix`` is compared case-insensitively and should match the
        ``event_prefix`` the interceptor is configured with.
        """
        if not prefix or name[: len(prefix)].lower() != prefix.lower():
            return False
        return callable(getattr(type(self), name, None))

    def has_event_handler(self, name: str) -> bool:
        """Check whether any handler is attached to ``name``."""
        return bool(self._handlers().get(name))

    def get_event_handlers(self, name: str) -> list[EventHandler]:
        """Return a copy of the handlers attached to ``name``."""
        return list(self._handlers().get(name, ()))

    def attach_event_handler(self, name: str, handler: EventHandler) -> None:
        """Attach a handler to an event.

        The name is not checked against the events the component defines:
        a handler attached to an unknown name is kept and simply never runs
        unless something raises that name.

        Args:
            name: Event name, matched exactly when raising
            handler: Callable receiving the event object

        Raises:
            InvalidHandlerError: If handler is not callable
        """
        if not callable(handler):
            raise InvalidHandlerError(
                f"Handler for event '{name}' is not callable",
                details={"event_name": name, "handler_type": type(handler).__name__},
            )
        self._handlers()[name].append(handler)

    def detach_event_handler(self, name: str, handler: EventHandler) -> bool:
        """Detach the first matching handler.

        Returns:
            True if a handler was removed
        """
        handlers = self._handlers().get(name)
        if not handlers:
            return False
        for index, attached in enumerate(handlers):
            if attached == handler:
                del handlers[index]
                return True
        return False

    def raise_event(self, name: str, event: Any) -> None:
        """Call every handler attached to ``name`` with ``event``.

        Dispatch stops early once a handler sets ``event.handled``. Raising
        a name with no handlers does nothing.
        """
        handlers = self.get_event_handlers(name)
        if not handlers:
            return
        logger.debug(
            "Raising %s on %s to %d handler(s)", name, type(self).__name__, len(handlers)
        )
        for handler in handlers:
            handler(event)
            if getattr(event, "handled", False):
                break
