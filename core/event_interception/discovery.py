"""
Event Name Discovery - Finds the events a component type defines.

A type can declare its events explicitly through an ``__events__`` class
attribute. Otherwise every method whose name starts with the event prefix
(``on`` by default, compared case-insensitively) and which takes at most one
argument besides ``self`` is treated as an event.

Discovery runs once per type. Results are kept in an EventNameCache, which
assumes all instances of a type expose the same events.
"""

import inspect
import logging
import threading
from typing import Any

from event_interception.exceptions import InvalidEventNameError

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _is_event_method(member: Any) -> bool:
    """Check that a class attribute looks like a handler-style event method."""
    skip_self = True
    if isinstance(member, staticmethod):
        member, skip_self = member.__func__, False
    elif isinstance(member, classmethod):
        member = member.__func__
    if not inspect.isfunction(member):
        return False

    try:
        params = list(inspect.signature(member).parameters.values())
    except (TypeError, ValueError):
        return False
    if skip_self:
        params = params[1:]

    required = 0
    for param in params:
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            required += 1
        elif (
            param.kind is inspect.Parameter.KEYWORD_ONLY
            and param.default is inspect.Parameter.empty
        ):
            return False
    return required <= 1


def discover_event_names(subject_type: type, prefix: str = "on") -> list[str]:
    """Collect the event names defined by ``subject_type``.

    Args:
        subject_type: The class to inspect
        prefix: Case-insensitive prefix marking event methods

    Returns:
        Event names, subclass declarations first. Treat the order as unordered.

    Raises:
        InvalidEventNameError: If ``__events__`` is declared but is not an
            iterable of strings, or if ``prefix`` is empty
    """
    declared = getattr(subject_type, "__events__", None)
    if declared is not None:
        error = InvalidEventNameError(
            f"{subject_type.__name__}.__events__ must be an iterable of strings",
            details={"type": subject_type.__qualname__},
        )
        if isinstance(declared, str):
            raise error
        try:
            # Iterators can only be consumed once.
            declared_names = list(declared)
        except TypeError:
            raise error from None
        if not all(isinstance(name, str) for name in declared_names):
            raise error
        return declared_names

    if not prefix.strip():
        raise InvalidEventNameError(
            "Event prefix must not be empty", details={"type": subject_type.__qualname__}
        )

    marker = prefix.lower()
    names: list[str] = []
    seen: set[str] = set()
    for klass in subject_type.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            # An override shadows the base definition, event or not.
            seen.add(name)
            if name[: len(marker)].lower() == marker and _is_event_method(member):
                names.append(name)
    return names


class EventNameCache:
    """Thread-safe cache of discovered event names, keyed by type.

    Entries are never evicted except through clear(). The ``discoveries``
    counter records how many times discovery actually ran, which is what
    callers check to confirm the cache is being reused.

    Example:
        cache = EventNameCache()
        cache.get_or_discover(Document)  # runs discovery
        cache.get_or_discover(Document)  # served from cache
        assert cache.discoveries == 1
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[type, str], list[str]] = {}
        self._lock = threading.Lock()
        self.discoveries = 0

    def get_or_discover(self, subject_type: type, prefix: str = "on") -> list[str]:
        """Return the event names for ``subject_type``, discovering them once.

        Returns:
            A copy of the cached names
        """
        key = (subject_type, prefix.lower())
        with self._lock:
            names = self._entries.get(key)
            if names is None:
                names = discover_event_names(subject_type, prefix)
                self._entries[key] = names
                self.discoveries += 1
                logger.debug(
                    "Discovered %d event(s) on %s: %s",
                    len(names),
                    subject_type.__qualname__,
                    names,
                )
            return list(names)

    def clear(self) -> None:
        """Drop every cached entry and reset the discovery counter."""
        with self._lock:
            self._entries.clear()
            self.discoveries = 0

    def __contains__(self, subject_type: object) -> bool:
        with self._lock:
            return any(key[0] is subject_type for key in self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Process-wide cache shared by interceptors created without one
_default_cache: EventNameCache | None = None
_default_cache_lock = threading.Lock()


def get_default_cache() -> EventNameCache:
    """Get the process-wide event name cache, creating it on first use."""
    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = EventNameCache()
        return _default_cache


def set_default_cache(cache: EventNameCache | None) -> None:
    """Replace the process-wide cache. None creates a fresh one on next use."""
    global _default_cache
    with _default_cache_lock:
        _default_cache = cache
