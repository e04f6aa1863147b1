"""Host environment protocols.

Warble never touches a real browser. Everything it reads from or writes
to the host (location, history, the document, events, elements) goes
through the protocols below. No base class required: the router checks
the shape, not the lineage.

``warble.testing.browser`` implements all of them in memory.
"""

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable, TypeAlias

# A listener may be a plain function or a coroutine function
Listener: TypeAlias = Callable[[Any], Awaitable[object] | object]


class HostEvent(Protocol):
    """The subset of a DOM ``Event`` the router reads."""

    type: str
    default_prevented: bool

    def prevent_default(self) -> None: ...


class HostMouseEvent(HostEvent, Protocol):
    """A click event with button and modifier state."""

    button: int
    meta_key: bool
    ctrl_key: bool
    shift_key: bool
    alt_key: bool

    def composed_path(self) -> Sequence[Any]: ...


@runtime_checkable
class EventTarget(Protocol):
    """Anything that can receive listeners and dispatch events."""

    def add_event_listener(self, type: str, listener: Listener) -> None: ...

    def remove_event_listener(self, type: str, listener: Listener) -> None: ...

    async def dispatch_event(self, event: Any) -> bool: ...


@runtime_checkable
class AttributeHost(Protocol):
    """An element-like object with markup attributes."""

    def get_attribute(self, name: str) -> str | None: ...

    def has_attribute(self, name: str) -> bool: ...

    def toggle_attribute(self, name: str, force: bool | None = None) -> bool: ...


@runtime_checkable
class SelectorRoot(Protocol):
    """A subtree that can be searched with a CSS-like selector."""

    def query_selector_all(self, selector: str) -> Iterable[Any]: ...


class HostElement(EventTarget, AttributeHost, Protocol):
    """An element: attributes, events, and a tag name."""

    tag_name: str


class HostLocation(Protocol):
    href: str
    origin: str


class HostHistory(Protocol):
    def push_state(self, state: Mapping[str, Any] | None, title: str, url: str) -> None: ...

    def replace_state(self, state: Mapping[str, Any] | None, title: str, url: str) -> None: ...


class HostDocument(Protocol):
    body: HostElement


class HostWindow(EventTarget, Protocol):
    """The top-level browsing context."""

    location: HostLocation
    history: HostHistory
    document: HostDocument

    def make_popstate_event(self, state: Mapping[str, Any] | None = None) -> HostEvent: ...

    def make_custom_event(self, type: str, detail: Mapping[str, Any], *, bubbles: bool = True) -> HostEvent: ...
