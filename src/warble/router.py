"""Router: one explicit object per application.

Owns the group registry, the activation engine, the reconciliation queue
and the navigation interceptor for a single window. There is no module
state: tests build a fresh ``Router`` per case and close it afterwards.

Usage::

    router = Router(window)
    await router.register(page_main)      # installs the interceptor
    await router.register(page_user)      # page_path = "/users/:id"
    await router.register(page_missing)   # fallback = True

    await router.navigate("/users/42")
    assert page_user.active

or, scoped::

    async with Router(window) as router:
        await router.register_from_selector(window.document.body, ".page")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextvars import Token
from typing import Any
from urllib.parse import urljoin

from warble.binding import ComponentResolver, ElementResolver
from warble.config import RoutingConfig
from warble.context import router_var
from warble.engine import ActivationEngine, ActivationState
from warble.errors import HostError
from warble.host import EventTarget, HostWindow, SelectorRoot
from warble.interceptor import InterceptorHandle, NavigationInterceptor, emit_popstate
from warble.queue import ReconciliationQueue
from warble.registry import GroupRegistry, RouteGroup
from warble.routing.location import Location
from warble.routing.matcher import Template, Validator, match

logger = logging.getLogger("warble.router")


class Router:
    """Client-side router bound to one window."""

    __slots__ = (
        "_token",
        "config",
        "engine",
        "interceptor",
        "queue",
        "registry",
        "resolver",
        "window",
    )

    def __init__(
        self,
        window: HostWindow,
        *,
        config: RoutingConfig | None = None,
        resolver: ComponentResolver | None = None,
    ) -> None:
        self.window = window
        self.config = config or RoutingConfig()
        self.resolver = resolver or ElementResolver(self.config)
        self.registry = GroupRegistry(self.resolver)
        self.engine = ActivationEngine(
            self.registry,
            self.resolver,
            self.current_location,
            config=self.config,
            on_activated=self._notify_activated,
        )
        self.queue = ReconciliationQueue(self.engine.reconcile_all)
        self.interceptor = NavigationInterceptor(window, self.reconcile)
        self._token: Token[Router] | None = None

    # -- Configuration --

    def set_config(self, key: str, value: Any) -> RoutingConfig:
        """Change one routing option, e.g. ``set_config("active_property", "selected")``.

        Raises ``ConfigurationError`` for unknown keys.
        """
        self.config = self.config.with_option(key, value)
        self.engine.config = self.config
        if isinstance(self.resolver, ElementResolver):
            self.resolver.config = self.config
        return self.config

    # -- Location --

    def current_location(self) -> Location:
        return Location.from_url(self.window.location.href)

    def match(self, template: Template | None, validator: Validator | None = None) -> dict[str, str] | None:
        """Match *template* against the window's current location."""
        return match(template, self.current_location(), validator)

    def state_of(self, component: Any) -> ActivationState:
        return self.engine.state_of(component)

    # -- Installation --

    @property
    def installed(self) -> bool:
        return self.interceptor.installed

    async def install(self) -> InterceptorHandle:
        """Install the navigation interceptor (once) and run an initial pass."""
        return await self.interceptor.install()

    async def reconcile(self, event: Any = None) -> None:
        """Run a reconciliation pass for *event*.

        With ``serialize_passes`` (the default) the pass goes through the
        queue: if another pass is in flight this returns once the request
        is queued, and the pass runs after the current one.
        """
        if self.config.serialize_passes:
            await self.queue.request(event)
        else:
            await self.engine.reconcile_all(event)

    async def _notify_activated(self, component: Any) -> None:
        if not isinstance(component, EventTarget):
            return
        event = self.window.make_custom_event(
            self.config.activated_event,
            {"element": component},
            bubbles=True,
        )
        await component.dispatch_event(event)

    # -- Registration --

    async def register(self, component: Any) -> RouteGroup:
        """Register *component* and settle its activation.

        The first registration installs the interceptor. When the group
        has no fallback only this component is evaluated; otherwise a
        full pass runs, since only a full pass can tell whether the
        fallback should be active. Registering from inside a pass (from a
        hook) queues a full pass instead, which runs once the current
        pass completes.
        """
        await self.install()
        group = self.registry.register(component)
        if self.config.serialize_passes and self.queue.in_flight:
            await self.queue.request()
        elif group.fallback is None:
            await self.engine.evaluate_component(component)
        else:
            await self.reconcile()
        return group

    def _selector_root(self, root: Any) -> SelectorRoot:
        if not isinstance(root, SelectorRoot):
            msg = f"{root!r} does not support query_selector_all()"
            raise HostError(msg)
        return root

    async def register_from_selector(self, root: Any, selector: str) -> list[Any]:
        """Register every element under *root* matching *selector*.

        Elements already in their group are skipped. Returns the newly
        registered elements.
        """
        registered: list[Any] = []
        for element in self._selector_root(root).query_selector_all(selector):
            if element in self.registry.group_of(element):
                continue
            await self.register(element)
            registered.append(element)
        return registered

    def unregister(self, component: Any) -> bool:
        """Remove *component* from its group. Returns whether it was a member."""
        removed = self.registry.unregister(component)
        if removed:
            self.engine.forget(component)
        return removed

    def unregister_from_selector(self, root: Any, selector: str) -> list[Any]:
        """Unregister every element under *root* matching *selector*."""
        return [
            element
            for element in self._selector_root(root).query_selector_all(selector)
            if self.unregister(element)
        ]

    # -- Navigation --

    async def navigate(self, url: str, *, replace: bool = False, state: Mapping[str, Any] | None = None) -> None:
        """Change the location programmatically and reconcile.

        Pushes (or replaces) the history entry, then emits ``popstate``
        so the interceptor and any other listeners react. Before the
        interceptor is installed the pass is run directly.
        """
        href = urljoin(self.window.location.href, url)
        history = self.window.history
        if replace:
            history.replace_state(state, "", href)
        else:
            history.push_state(state, "", href)

        logger.debug("Navigating to %s", href)
        await emit_popstate(self.window, state)
        if not self.installed:
            await self.reconcile()

    # -- Teardown --

    def close(self) -> None:
        """Remove listeners and forget every registration."""
        handle = self.interceptor.handle
        if handle is not None:
            handle.close()
        self.registry.clear()
        self.engine.reset()

    async def __aenter__(self) -> Router:
        self._token = router_var.set(self)
        await self.install()
        return self

    async def __aexit__(self, *args: object) -> None:
        self.close()
        if self._token is not None:
            router_var.reset(self._token)
            self._token = None
