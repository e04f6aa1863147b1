"""Activation engine: decides which components are active.

One reconciliation pass walks every group in creation order, and every
member of a group in registration order, awaiting each component's
lifecycle hooks before moving on. A group's fallback is considered only
after all of its members.

Per component, the engine tracks three states:

- ``INACTIVE``: did not match the location on its last evaluation
- ``ACTIVE``: matched; its active flag is set
- ``DETOURED_MATCH``: matched, but activation is disabled, so only its
  hooks ran

Hooks fire when a component enters the active state (and, with
``RoutingConfig.refire_on_params_change``, when the parameters it
matched with change). A detoured component's hooks fire on every pass
that matches it. Hook exceptions are not caught here.
"""

import logging
import weakref
from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import Any, TypeAlias

from warble._internal.invoke import invoke
from warble.binding import ComponentResolver
from warble.config import RoutingConfig
from warble.registry import GroupRegistry, RouteGroup
from warble.routing.location import Location
from warble.routing.matcher import match

logger = logging.getLogger("warble.engine")

# Called after a component's active flag flips to True
ActivatedCallback: TypeAlias = Callable[[Any], Awaitable[None]]


class ActivationState(StrEnum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    DETOURED_MATCH = "detoured_match"


class ActivationEngine:
    """Evaluates components and reconciles groups against the location.

    Usage::

        engine = ActivationEngine(registry, resolver, lambda: Location.from_url(href))
        await engine.reconcile_all(event)
    """

    __slots__ = ("_activated", "_detoured", "_location", "_on_activated", "_registry", "_resolver", "config")

    def __init__(
        self,
        registry: GroupRegistry,
        resolver: ComponentResolver,
        location: Callable[[], Location],
        *,
        config: RoutingConfig | None = None,
        on_activated: ActivatedCallback | None = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._location = location
        self._on_activated = on_activated
        self.config = config or RoutingConfig()
        # Parameters each active component last ran its hooks with
        self._activated: weakref.WeakKeyDictionary[Any, dict[str, str]] = weakref.WeakKeyDictionary()
        self._detoured: weakref.WeakSet[Any] = weakref.WeakSet()

    def state_of(self, component: Any) -> ActivationState:
        if self._resolver.is_active(component):
            return ActivationState.ACTIVE
        if component in self._detoured:
            return ActivationState.DETOURED_MATCH
        return ActivationState.INACTIVE

    def forget(self, component: Any) -> None:
        """Drop per-component bookkeeping (on unregister)."""
        self._activated.pop(component, None)
        self._detoured.discard(component)

    def reset(self) -> None:
        """Drop all per-component bookkeeping (on router close)."""
        self._activated.clear()
        self._detoured.clear()

    async def _run_hooks(self, component: Any, params: Mapping[str, str], event: Any) -> None:
        pre = self._resolver.pre_router_callback(component)
        if pre is not None:
            await invoke(pre, params, event)
        hook = self._resolver.router_callback(component)
        if hook is not None:
            await invoke(hook, params, event)

    async def _toggle(self, component: Any, active: bool) -> None:
        self._resolver.set_active(component, active)
        if active and self._on_activated is not None:
            await self._on_activated(component)

    def _needs_hooks(self, component: Any, params: dict[str, str]) -> bool:
        previous = self._activated.get(component)
        if previous is None:
            return True
        return self.config.refire_on_params_change and previous != params

    async def evaluate_component(self, component: Any, event: Any = None, *, location: Location | None = None) -> bool:
        """Match one component against the location and update its state.

        Returns whether the component counts as matched for its group.
        A component with activation disabled never counts.
        """
        resolver = self._resolver
        template = resolver.page_path(component)
        group = self._registry.group_of(component)
        disabled = resolver.activation_disabled(component)

        if not template:
            if component is not group.fallback and not disabled:
                logger.error("Routing component has no path: %r", component)
            self._detoured.discard(component)
            return False

        params = match(template, location or self._location())

        # Detour: run the hooks, never activate
        if disabled:
            if params is None:
                self._detoured.discard(component)
                return False
            self._detoured.add(component)
            await self._run_hooks(component, params, event)
            return False

        # An unmatched fallback is settled after the members
        if params is None and component is group.fallback:
            self._activated.pop(component, None)
            return False

        matched = params is not None
        if matched != resolver.is_active(component):
            await self._toggle(component, matched)

        if params is None:
            self._activated.pop(component, None)
            return False

        if self._needs_hooks(component, params):
            await self._run_hooks(component, params, event)
            self._activated[component] = params

        group.active = component
        group.active_params = params
        return True

    async def reconcile_group(self, group: RouteGroup, event: Any = None, *, location: Location | None = None) -> bool:
        """Evaluate every member, then settle the fallback.

        Returns whether any member matched. A group without members is
        left untouched, even if it has a fallback.
        """
        if not group.members:
            return False

        location = location or self._location()
        group.active = None
        group.active_params = None

        any_matched = False
        # Hooks may unregister components mid-pass
        for component in list(group.members):
            matched = await self.evaluate_component(component, event, location=location)
            any_matched = any_matched or matched

        fallback = group.fallback
        if fallback is not None and group.active is not fallback:
            fallback_active = not any_matched
            if fallback_active != self._resolver.is_active(fallback):
                await self._toggle(fallback, fallback_active)
                if fallback_active:
                    await self._run_hooks(fallback, {}, event)

        return any_matched

    async def reconcile_all(self, event: Any = None) -> None:
        """Run one reconciliation pass over every group.

        The location is read once, so all groups see the same snapshot.
        """
        location = self._location()
        logger.debug("Reconciling %d group(s) for %s", len(self._registry), location)
        for group in self._registry.groups():
            await self.reconcile_group(group, event, location=location)
