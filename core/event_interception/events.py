"""Event payloads passed between components and interceptors.

Every event carries the component that raised it (``sender``), a mapping of
named parameters and a ``handled`` flag that stops further dispatch once set.
InterceptionEvent narrows the parameter mapping into two typed fields.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Event(BaseModel):
    """A named-parameter event raised by a component.

    Attributes:
        sender: The object that raised the event
        params: Event-specific named parameters
        handled: Set by a handler to stop the remaining handlers from running
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    sender: Any = None
    params: dict[str, Any] = Field(default_factory=dict)
    handled: bool = False


class InterceptionEvent(Event):
    """Wrapper raised by an interceptor for every event it observes.

    The intercepted event is held by reference, never copied, so handlers
    can compare it with ``is`` against the object the subject fired. The
    ``params`` mapping mirrors both fields for consumers that read events
    generically.

    Example:
        def on_intercepted(event: InterceptionEvent) -> None:
            print(event.intercepted_event_name, event.intercepted_event)

        interceptor.attach_event_handler("on_event_intercepted", on_intercepted)
    """

    INTERCEPTED_EVENT_NAME_PARAM: ClassVar[str] = "intercepted_event_name"
    INTERCEPTED_EVENT_PARAM: ClassVar[str] = "intercepted_event"

    intercepted_event_name: str
    intercepted_event: Any = None

    @model_validator(mode="after")
    def _mirror_params(self) -> "InterceptionEvent":
        self.params[self.INTERCEPTED_EVENT_NAME_PARAM] = self.intercepted_event_name
        self.params[self.INTERCEPTED_EVENT_PARAM] = self.intercepted_event
        return self

    @classmethod
    def create(cls, sender: Any, event_name: str, event: Any) -> "InterceptionEvent":
        """Factory method wrapping an intercepted event.

        Args:
            sender: The interceptor raising the wrapper
            event_name: Name of the event that fired on the subject
            event: The event object the subject fired

        Returns:
            A new InterceptionEvent instance
        """
        return cls(
            sender=sender,
            intercepted_event_name=event_name,
            intercepted_event=event,
        )
