"""Warble exception hierarchy.

Shared across the registry, engine, interceptor, and router so every
module raises and catches the same types.

Routing problems that only affect a single component (a missing path
template, a duplicate registration) are logged, not raised. Errors
raised by lifecycle hooks are never wrapped: they propagate out of the
reconciliation pass unchanged.
"""


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when routing configuration is invalid.

    Typically raised by ``RoutingConfig.with_option()`` for an unknown
    key or a value of the wrong type.
    """


class HostError(WarbleError):
    """Raised when a host object lacks a capability the router needs.

    For example, registering from a selector against a root that does
    not implement ``query_selector_all``.
    """
