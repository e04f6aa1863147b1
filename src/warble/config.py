"""Routing configuration.

RoutingConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups at call sites.

Attribute names are the markup spelling (``page-path``); property names
are the Python attribute spelling (``page_path``).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from warble.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Routing configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutingConfig(active_property="activated", serialize_passes=False)
    """

    # Active flag
    active_attribute: str = "active"
    active_property: str = "active"

    # Path template
    page_path_attribute: str = "page-path"
    page_path_property: str = "page_path"

    # Routing group
    routing_group_attribute: str = "routing-group"
    routing_group_property: str = "routing_group"
    default_group: str = "default"

    # Fallback
    fallback_attribute: str = "fallback"
    fallback_property: str = "fallback"

    # Disabled activation (hooks only, never active)
    disable_activation_attribute: str = "disable-activation"
    disable_activation_property: str = "disable_activation"

    # Lifecycle hooks
    pre_router_callback_property: str = "pre_router_callback"
    router_callback_property: str = "router_callback"

    # Notification dispatched on a component entering the active state
    activated_event: str = "route-activated"

    # At most one reconciliation pass in flight; later requests queue
    serialize_passes: bool = True

    # Re-run hooks for the active component when its bound parameters change
    refire_on_params_change: bool = True

    def with_option(self, key: str, value: Any) -> RoutingConfig:
        """Return a copy with *key* set to *value*.

        Raises ``ConfigurationError`` for unknown keys or values whose
        type does not match the field's current value.
        """
        known = {f.name for f in fields(self)}
        if key not in known:
            msg = f"Unknown routing option {key!r}. Known options: {', '.join(sorted(known))}"
            raise ConfigurationError(msg)
        current = getattr(self, key)
        if type(value) is not type(current):
            msg = (
                f"Routing option {key!r} expects {type(current).__name__}, "
                f"got {type(value).__name__}"
            )
            raise ConfigurationError(msg)
        return replace(self, **{key: value})
