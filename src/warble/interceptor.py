"""Navigation interceptor: turns link clicks and history changes into passes.

Listens for plain left-clicks on same-origin ``<a href>`` links anywhere
in the document. Instead of letting the host navigate (and reload), it
pushes the destination onto the session history and asks for a
reconciliation pass. Back/forward navigation arrives as ``popstate`` and
asks for a pass too.

A click is left alone when:

- another listener already called ``prevent_default()``
- it is not the primary button, or a modifier key is held
- no ``<a>`` encloses the clicked node
- the link has a ``target``, a ``download`` attribute, or ``rel="external"``
- the link has no ``href``, or points at a non-HTTP(S) URL (``mailto:``)
- the destination is on another origin

Changing history with ``push_state()`` / ``replace_state()`` does not
raise ``popstate`` by itself; code that does so should call
``emit_popstate()`` afterwards so the router notices.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, TypeAlias
from urllib.parse import urljoin, urlsplit

from warble.host import HostEvent, HostMouseEvent, HostWindow

logger = logging.getLogger("warble.interceptor")

NavigateCallback: TypeAlias = Callable[[Any], Awaitable[object]]

_NAVIGABLE_SCHEMES = frozenset({"http", "https"})


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


def _find_anchor(path: Sequence[Any]) -> Any:
    for node in path:
        if str(getattr(node, "tag_name", "")).upper() == "A":
            return node
    return None


async def emit_popstate(window: HostWindow, state: Mapping[str, Any] | None = None) -> None:
    """Dispatch a ``popstate`` on *window* after a programmatic history change."""
    await window.dispatch_event(window.make_popstate_event(state))


class InterceptorHandle:
    """Returned by ``NavigationInterceptor.install()``.

    ``close()`` removes the click and popstate listeners.
    """

    __slots__ = ("_interceptor",)

    def __init__(self, interceptor: NavigationInterceptor) -> None:
        self._interceptor = interceptor

    @property
    def closed(self) -> bool:
        return self._interceptor.handle is not self

    def close(self) -> None:
        if not self.closed:
            self._interceptor._uninstall()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<InterceptorHandle {state}>"


class NavigationInterceptor:
    """Intercepts in-page navigation for one window.

    Usage::

        interceptor = NavigationInterceptor(window, router.reconcile)
        handle = await interceptor.install()   # runs one initial pass
        ...
        handle.close()
    """

    __slots__ = ("_handle", "_on_navigate", "_synthetic", "window")

    def __init__(self, window: HostWindow, on_navigate: NavigateCallback) -> None:
        self.window = window
        self._on_navigate = on_navigate
        self._handle: InterceptorHandle | None = None
        self._synthetic: HostEvent | None = None

    @property
    def handle(self) -> InterceptorHandle | None:
        return self._handle

    @property
    def installed(self) -> bool:
        return self._handle is not None

    async def install(self) -> InterceptorHandle:
        """Start listening, then run one pass for the current location.

        Idempotent: later calls return the same handle without another pass.
        """
        if self._handle is not None:
            return self._handle

        self.window.document.body.add_event_listener("click", self.handle_click)
        self.window.add_event_listener("popstate", self.handle_popstate)
        self._handle = InterceptorHandle(self)
        logger.debug("Navigation interceptor installed on %r", self.window)

        await self._on_navigate(None)
        return self._handle

    def _uninstall(self) -> None:
        self.window.document.body.remove_event_listener("click", self.handle_click)
        self.window.remove_event_listener("popstate", self.handle_popstate)
        self._handle = None
        logger.debug("Navigation interceptor removed from %r", self.window)

    def destination(self, event: HostMouseEvent) -> str | None:
        """The absolute URL a click should be routed to, or ``None`` to ignore it."""
        if event.default_prevented or event.button != 0:
            return None
        if event.meta_key or event.ctrl_key or event.shift_key or event.alt_key:
            return None

        anchor = _find_anchor(event.composed_path())
        if anchor is None:
            return None
        if anchor.get_attribute("target") or anchor.has_attribute("download"):
            return None
        if "external" in (anchor.get_attribute("rel") or "").lower().split():
            return None

        raw = anchor.get_attribute("href")
        if not raw:
            return None

        current = self.window.location.href
        href = urljoin(current, raw.strip())
        if urlsplit(href).scheme.lower() not in _NAVIGABLE_SCHEMES:
            return None
        if _origin(href) != _origin(current):
            return None
        return href

    async def handle_click(self, event: HostMouseEvent) -> None:
        href = self.destination(event)
        if href is None:
            return

        event.prevent_default()
        if href == self.window.location.href:
            return

        logger.debug("Intercepted navigation to %s", href)
        self.window.history.push_state({}, "", href)

        # Observers get a popstate; our own listener skips this one
        synthetic = self.window.make_popstate_event(None)
        self._synthetic = synthetic
        try:
            await self.window.dispatch_event(synthetic)
        finally:
            self._synthetic = None

        await self._on_navigate(event)

    async def handle_popstate(self, event: HostEvent) -> None:
        if event is self._synthetic:
            return
        await self._on_navigate(event)
