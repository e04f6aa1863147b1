"""Component configuration resolution.

The engine never reads a component directly. It asks a
``ComponentResolver`` for the resolved capabilities: path template,
routing group, fallback and disabled-activation flags, the active flag,
and the two lifecycle hooks.

``ElementResolver`` is the default binding. Every capability is looked
up in three tiers, first truthy value wins:

1. the markup attribute (``page-path="/users/:id"``), when the component
   has attributes
2. the instance property (``component.page_path``)
3. the type-level default (``PageUser.page_path``)

All three of these declare the same route::

    <page-user page-path="/users/:id"></page-user>

    page.page_path = "/users/:id"

    class PageUser(Element):
        page_path = "/users/:id"
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, TypeAlias

from warble.config import RoutingConfig
from warble.host import AttributeHost
from warble.routing.matcher import Template

# pre_router_callback / router_callback: (params, event) -> None | Awaitable
Hook: TypeAlias = Callable[[Mapping[str, str], Any], Awaitable[object] | object]


class ComponentResolver(Protocol):
    """Resolves routing capabilities for a component.

    Implemented by the host binding. The activation engine consumes
    only the resolved values.
    """

    def page_path(self, component: Any) -> Template | None: ...

    def routing_group(self, component: Any) -> str: ...

    def is_fallback(self, component: Any) -> bool: ...

    def activation_disabled(self, component: Any) -> bool: ...

    def is_active(self, component: Any) -> bool: ...

    def set_active(self, component: Any, active: bool) -> None: ...

    def pre_router_callback(self, component: Any) -> Hook | None: ...

    def router_callback(self, component: Any) -> Hook | None: ...


def _type_default(component: Any, name: str) -> Any:
    value = getattr(type(component), name, None)
    # A property on the class is the instance tier, not a default
    if isinstance(value, property):
        return None
    return value


class ElementResolver:
    """Attribute, then property, then type-level lookup.

    Attribute and property names come from ``RoutingConfig``, so
    ``RoutingConfig(active_property="selected")`` makes the router read
    and write ``component.selected``.
    """

    __slots__ = ("config",)

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self.config = config or RoutingConfig()

    def _attribute(self, component: Any, name: str) -> str | None:
        if isinstance(component, AttributeHost):
            return component.get_attribute(name)
        return None

    def _has_attribute(self, component: Any, name: str) -> bool:
        if isinstance(component, AttributeHost):
            return component.has_attribute(name)
        return False

    def _lookup(self, component: Any, attribute: str, prop: str) -> Any:
        return (
            self._attribute(component, attribute)
            or getattr(component, prop, None)
            or _type_default(component, prop)
        )

    def _flag(self, component: Any, attribute: str, prop: str) -> bool:
        return bool(
            self._has_attribute(component, attribute)
            or getattr(component, prop, None)
            or _type_default(component, prop)
        )

    def page_path(self, component: Any) -> Template | None:
        """Resolve the path template.

        A space-separated attribute value is a list of alternatives:
        ``page-path="/ /home"`` matches either path.
        """
        cfg = self.config
        raw = self._attribute(component, cfg.page_path_attribute)
        if raw and " " in raw:
            return raw.split()
        return (
            raw
            or getattr(component, cfg.page_path_property, None)
            or _type_default(component, cfg.page_path_property)
            or None
        )

    def routing_group(self, component: Any) -> str:
        cfg = self.config
        group = self._lookup(component, cfg.routing_group_attribute, cfg.routing_group_property)
        return str(group) if group else cfg.default_group

    def is_fallback(self, component: Any) -> bool:
        cfg = self.config
        return self._flag(component, cfg.fallback_attribute, cfg.fallback_property)

    def activation_disabled(self, component: Any) -> bool:
        cfg = self.config
        return self._flag(component, cfg.disable_activation_attribute, cfg.disable_activation_property)

    def is_active(self, component: Any) -> bool:
        cfg = self.config
        return bool(
            self._has_attribute(component, cfg.active_attribute)
            or getattr(component, cfg.active_property, False)
        )

    def set_active(self, component: Any, active: bool) -> None:
        """Write the active flag to the property and mirror it to the attribute."""
        cfg = self.config
        setattr(component, cfg.active_property, active)
        if isinstance(component, AttributeHost):
            component.toggle_attribute(cfg.active_attribute, active)

    def _hook(self, component: Any, name: str) -> Hook | None:
        hook = getattr(component, name, None)
        return hook if callable(hook) else None

    def pre_router_callback(self, component: Any) -> Hook | None:
        return self._hook(component, self.config.pre_router_callback_property)

    def router_callback(self, component: Any) -> Hook | None:
        return self._hook(component, self.config.router_callback_property)
