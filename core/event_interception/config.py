"""
Configuration for the event interceptor.

Provides environment-based configuration with defaults that reproduce the
plain, unguarded interception behaviour.

Environment Variables:
    EVENT_INTERCEPTOR_PREFIX: Prefix marking event methods (default: on)
    EVENT_INTERCEPTOR_WARN_ON_DUPLICATES: Warn on repeated registration (default: true)
    EVENT_INTERCEPTOR_GUARD_REENTRANCY: Drop nested interceptions (default: false)
    EVENT_INTERCEPTOR_MAX_DEPTH: Nesting allowed when guarded (default: 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from event_interception.exceptions import ConfigurationError


@dataclass(frozen=True)
class InterceptorConfig:
    """
    Configuration for EventInterceptor.

    Immutable configuration object that can be created from environment
    variables or passed explicitly.

    Attributes:
        event_prefix: Case-insensitive prefix identifying event methods
        warn_on_duplicates: Log a warning when a subject event is forwarded twice
        guard_reentrancy: Drop interceptions nested deeper than max_depth
        max_depth: Number of nested interceptions allowed while guarded
    """

    event_prefix: str = "on"
    warn_on_duplicates: bool = True
    guard_reentrancy: bool = False
    max_depth: int = 1

    def __post_init__(self) -> None:
        if not self.event_prefix or not self.event_prefix.strip():
            raise ConfigurationError(
                "event_prefix must not be empty",
                details={"event_prefix": self.event_prefix},
            )
        if self.max_depth < 1:
            raise ConfigurationError(
                "max_depth must be at least 1",
                details={"max_depth": self.max_depth},
            )

    @classmethod
    def from_env(cls) -> InterceptorConfig:
        """
        Create configuration from environment variables.

        Values that cannot be parsed fall back to the defaults.

        Returns:
            InterceptorConfig populated from environment variables
        """
        def parse_bool(value: str | None, default: bool) -> bool:
            if value is None:
                return default
            return value.lower() in ("true", "1", "yes", "on")

        def parse_int(value: str | None, default: int) -> int:
            if value is None:
                return default
            try:
                parsed = int(value)
            except ValueError:
                return default
            return parsed if parsed >= 1 else default

        prefix = os.environ.get("EVENT_INTERCEPTOR_PREFIX", "").strip()

        return cls(
            event_prefix=prefix or "on",
            warn_on_duplicates=parse_bool(
                os.environ.get("EVENT_INTERCEPTOR_WARN_ON_DUPLICATES"), True
            ),
            guard_reentrancy=parse_bool(
                os.environ.get("EVENT_INTERCEPTOR_GUARD_REENTRANCY"), False
            ),
            max_depth=parse_int(os.environ.get("EVENT_INTERCEPTOR_MAX_DEPTH"), 1),
        )

    def with_overrides(self, **kwargs: Any) -> InterceptorConfig:
        """
        Create a new config with specific values overridden.

        Args:
            **kwargs: Fields to override

        Returns:
            New InterceptorConfig with overrides applied
        """
        return replace(self, **kwargs)


# Default configuration singleton (lazy-loaded from environment)
_default_config: InterceptorConfig | None = None


def get_default_config() -> InterceptorConfig:
    """
    Get the default interceptor configuration.

    Lazily loads from environment on first call.

    Returns:
        The default InterceptorConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = InterceptorConfig.from_env()
    return _default_config


def set_default_config(config: InterceptorConfig | None) -> None:
    """
    Set the default interceptor configuration.

    Use this for testing or programmatic configuration. Passing None makes
    the next get_default_config() call reload from the environment.

    Args:
        config: The configuration to use as default
    """
    global _default_config
    _default_config = config
