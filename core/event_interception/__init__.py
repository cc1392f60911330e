"""
Event Interception: observe every event a component raises through one event.

An EventInterceptor attaches forwarders to the events of a subject component
and re-raises each of them as a single ``on_event_intercepted`` event whose
InterceptionEvent names the original event and carries the original object.

Example:
    from event_interception import Component, Event, EventInterceptor

    class Document(Component):
        def on_save(self, event):
            self.raise_event("on_save", event)

    seen = []
    interceptor = EventInterceptor()
    interceptor.attach_event_handler("on_event_intercepted", seen.append)
    interceptor.initialize(Document())
"""

from event_interception.component import Component, EventHandler
from event_interception.config import (
    InterceptorConfig,
    get_default_config,
    set_default_config,
)
from event_interception.discovery import (
    EventNameCache,
    discover_event_names,
    get_default_cache,
    set_default_cache,
)
from event_interception.events import Event, InterceptionEvent
from event_interception.exceptions import (
    ConfigurationError,
    InterceptionError,
    InvalidEventNameError,
    InvalidHandlerError,
    InvalidSubjectError,
)
from event_interception.interceptor import WILDCARD, EventForwarder, EventInterceptor
from event_interception.logging_config import (
    configure_logging,
    disable_logging,
    log_intercepted_events,
)

__version__ = "0.1.0"

__all__ = [
    "Component",
    "ConfigurationError",
    "Event",
    "EventForwarder",
    "EventHandler",
    "EventInterceptor",
    "EventNameCache",
    "InterceptionError",
    "InterceptionEvent",
    "InterceptorConfig",
    "InvalidEventNameError",
    "InvalidHandlerError",
    "InvalidSubjectError",
    "WILDCARD",
    "configure_logging",
    "disable_logging",
    "discover_event_names",
    "get_default_cache",
    "get_default_config",
    "log_intercepted_events",
    "set_default_cache",
    "set_default_config",
]
