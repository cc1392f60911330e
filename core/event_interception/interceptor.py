"""
Event Interceptor - Re-raises every event of a subject as one wrapped event.

The interceptor attaches a forwarder to each event of the subject. When the
subject raises one of them, the forwarder hands the event and its name to
the interceptor, which raises ``on_event_intercepted`` on itself with an
InterceptionEvent describing what fired. Consumers listen to that single
event instead of wiring up every event of the subject.

Example:
    interceptor = EventInterceptor()
    interceptor.attach_event_handler("on_event_intercepted", audit_log.append)
    interceptor.initialize(document)              # every on* event
    interceptor.initialize(editor, ["on_close"])  # selected events only

Everything runs synchronously inside the subject's own raise_event call.
"""

import logging
import weakref
from collections.abc import Sequence
from typing import Any, Optional

from event_interception.component import Component
from event_interception.config import InterceptorConfig, get_default_config
from event_interception.discovery import EventNameCache, get_default_cache
from event_interception.events import InterceptionEvent
from event_interception.exceptions import InvalidEventNameError, InvalidSubjectError

logger = logging.getLogger(__name__)

WILDCARD = "*"


class EventForwarder:
    """Binds one event name of a subject to an interceptor.

    The forwarder only holds a weak reference to the interceptor, so a
    subject keeping its handlers alive never keeps the interceptor alive.
    Once the interceptor is gone, forward() does nothing.
    """

    def __init__(self, interceptor: "EventInterceptor", event_name: str) -> None:
        self._interceptor_ref = weakref.ref(interceptor)
        self.event_name = event_name

    @property
    def interceptor(self) -> Optional["EventInterceptor"]:
        return self._interceptor_ref()

    def forward(self, event: Any) -> None:
        interceptor = self._interceptor_ref()
        if interceptor is None:
            logger.debug("Interceptor for %s is gone, dropping event", self.event_name)
            return
        interceptor.intercept(self.event_name, event)

    def __repr__(self) -> str:
        return f"EventForwarder(event_name={self.event_name!r})"


class EventInterceptor(Component):
    """Raises ``on_event_intercepted`` whenever an observed subject raises an event.

    Repeated initialize() calls are not de-duplicated: forwarding the same
    event of the same subject twice makes each firing produce two wrapped
    events. A warning is logged when that happens unless disabled in the
    configuration.
    """

    INTERCEPTED_EVENT = "on_event_intercepted"

    def __init__(
        self,
        config: Optional[InterceptorConfig] = None,
        cache: Optional[EventNameCache] = None,
    ) -> None:
        """Initialize the EventInterceptor.

        Args:
            config: Interceptor settings, defaults to get_default_config()
            cache: Event name cache, defaults to the process-wide cache
        """
        super().__init__()
        self._config = config or get_default_config()
        self._cache = cache if cache is not None else get_default_cache()
        self._registrations: list[tuple[weakref.ref, EventForwarder]] = []
        self._depth = 0

    @property
    def config(self) -> InterceptorConfig:
        return self._config

    @property
    def cache(self) -> EventNameCache:
        return self._cache

    @property
    def forwarders(self) -> list[EventForwarder]:
        """Forwarders attached to subjects that are still alive."""
        return [forwarder for ref, forwarder in self._registrations if ref() is not None]

    def initialize(self, subject: Any, events: Sequence[str] = (WILDCARD,)) -> None:
        """Attach a forwarder to every requested event of ``subject``.

        Args:
            subject: Object exposing attach_event_handler(name, handler)
            events: Event names to intercept. The single-element wildcard
                ``["*"]`` (the default) means every event the subject's type
                defines. Any other list is used verbatim, without checking
                that the subject defines those events.

        Subjects that cannot be weakly referenced (``__slots__`` without
        ``__weakref__``) still get their forwarders, but the interceptor does
        not track them: no duplicate warning, and release() finds nothing.

        Raises:
            InvalidSubjectError: If subject is None or cannot attach handlers
            InvalidEventNameError: If events is not a list or tuple of strings
        """
        if subject is None or not callable(getattr(subject, "attach_event_handler", None)):
            raise InvalidSubjectError(
                "Subject must provide attach_event_handler(name, handler)",
                details={"subject_type": type(subject).__name__},
            )

        event_names = self._resolve_event_names(subject, events)
        subject_ref = self._track(subject)
        if subject_ref is None:
            logger.debug(
                "%s cannot be weakly referenced; its forwarders are not tracked",
                type(subject).__name__,
            )

        for event_name in event_names:
            if self._config.warn_on_duplicates and self._is_forwarding(subject, event_name):
                logger.warning(
                    "Event %s of %s is already intercepted; each firing will be "
                    "reported more than once",
                    event_name,
                    type(subject).__name__,
                )
            forwarder = EventForwarder(self, event_name)
            subject.attach_event_handler(event_name, forwarder.forward)
            if subject_ref is not None:
                self._registrations.append((subject_ref, forwarder))

        logger.debug(
            "Intercepting %d event(s) of %s", len(event_names), type(subject).__name__
        )

    def intercept(self, event_name: str, event: Any) -> None:
        """Raise ``on_event_intercepted`` describing an event of a subject.

        Called by forwarders. When re-entrancy guarding is enabled, an
        interception nested deeper than ``max_depth`` is logged and dropped.
        """
        if self._config.guard_reentrancy and self._depth >= self._config.max_depth:
            logger.warning(
                "Dropping re-entrant interception of %s at depth %d",
                event_name,
                self._depth,
            )
            return

        self._depth += 1
        try:
            self.on_event_intercepted(InterceptionEvent.create(self, event_name, event))
        finally:
            self._depth -= 1

    def on_event_intercepted(self, event: InterceptionEvent) -> None:
        self.raise_event(self.INTERCEPTED_EVENT, event)

    def release(self, subject: Any) -> int:
        """Detach every forwarder this interceptor attached to ``subject``.

        Returns:
            Number of forwarders detached

        Raises:
            InvalidSubjectError: If subject cannot detach handlers
        """
        detach = getattr(subject, "detach_event_handler", None)
        if not callable(detach):
            raise InvalidSubjectError(
                "Subject must provide detach_event_handler(name, handler)",
                details={"subject_type": type(subject).__name__},
            )

        kept: list[tuple[weakref.ref, EventForwarder]] = []
        released = 0
        for ref, forwarder in self._registrations:
            target = ref()
            if target is None:
                continue
            if target is subject:
                detach(forwarder.event_name, forwarder.forward)
                released += 1
            else:
                kept.append((ref, forwarder))
        self._registrations = kept

        logger.debug("Released %d forwarder(s) from %s", released, type(subject).__name__)
        return released

    def _resolve_event_names(self, subject: Any, events: Sequence[str]) -> list[str]:
        if isinstance(events, str) or not isinstance(events, (list, tuple)):
            raise InvalidEventNameError(
                "Events must be a list or tuple of event names",
                details={"events_type": type(events).__name__},
            )
        invalid = [name for name in events if not isinstance(name, str)]
        if invalid:
            raise InvalidEventNameError(
                "Event names must be strings",
                details={"invalid": invalid},
            )

        if len(events) == 1 and events[0] == WILDCARD:
            return self._cache.get_or_discover(type(subject), self._config.event_prefix)
        return list(events)

    def _track(self, subject: Any) -> Optional[weakref.ref]:
        """Weak reference to ``subject`` that drops its registrations once collected."""
        interceptor_ref = weakref.ref(self)

        def forget(dead: weakref.ref) -> None:
            interceptor = interceptor_ref()
            if interceptor is not None:
                interceptor._registrations = [
                    entry for entry in interceptor._registrations if entry[0] is not dead
                ]

        try:
            return weakref.ref(subject, forget)
        except TypeError:
            return None

    def _is_forwarding(self, subject: Any, event_name: str) -> bool:
        return any(
            ref() is subject and forwarder.event_name == event_name
            for ref, forwarder in self._registrations
        )
