"""Route group registry: named groups of routable components.

Each group is an independent namespace: its own ordered member list,
its own fallback, and its own "currently active" pointer. Groups are
created lazily on first reference and iterate in creation order.

The registry holds back-references only. It never constructs, activates,
or destroys components; ``warble.engine`` does the activating.
"""

import logging
import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from warble.binding import ComponentResolver

logger = logging.getLogger("warble.registry")


@dataclass(slots=True, eq=False)
class RouteGroup:
    """One routing group.

    ``active`` is the member that matched during the last pass, if any;
    ``active_params`` are the parameters it matched with.
    """

    name: str
    members: list[Any] = field(default_factory=list)
    fallback: Any = None
    active: Any = None
    active_params: dict[str, str] | None = None

    def __contains__(self, component: object) -> bool:
        return any(member is component for member in self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return f"<RouteGroup {self.name!r} members={len(self.members)} active={self.active!r}>"


class GroupRegistry:
    """Ordered registry of routing groups.

    Usage::

        registry = GroupRegistry(resolver)
        group = registry.register(page)
        registry.unregister(page)
        for group in registry.groups():
            ...
    """

    __slots__ = ("_groups", "_resolver", "_seen")

    def __init__(self, resolver: ComponentResolver) -> None:
        self._resolver = resolver
        # dicts keep insertion order: iteration is group-creation order
        self._groups: dict[str, RouteGroup] = {}
        self._seen: weakref.WeakSet[Any] = weakref.WeakSet()

    def group(self, name: str) -> RouteGroup:
        """Return the group called *name*, creating it if needed."""
        group = self._groups.get(name)
        if group is None:
            group = RouteGroup(name=name)
            self._groups[name] = group
        return group

    def get(self, name: str) -> RouteGroup | None:
        """Look up a group without creating it."""
        return self._groups.get(name)

    def group_of(self, component: Any) -> RouteGroup:
        """Return (creating if needed) the group *component* belongs to."""
        return self.group(self._resolver.routing_group(component))

    def register(self, component: Any) -> RouteGroup:
        """Append *component* to its group and return the group.

        The first fallback registered in a group becomes the group's
        fallback; later ones are ordinary members. Registering the same
        instance twice logs a warning and appends it again.
        """
        group = self.group_of(component)

        if component in self._seen:
            logger.warning("Component registered twice for routing: %r", component)
        self._seen.add(component)
        group.members.append(component)

        if group.fallback is None and self._resolver.is_fallback(component):
            group.fallback = component

        logger.debug("Registered %r in group %r", component, group.name)
        return group

    def unregister(self, component: Any) -> bool:
        """Remove *component* from its group.

        Returns ``False`` when the group does not exist or the component
        is not a member.
        """
        group = self.get(self._resolver.routing_group(component))
        if group is None or component not in group:
            return False

        group.members = [member for member in group.members if member is not component]
        if group.active is component:
            group.active = None
            group.active_params = None

        logger.debug("Unregistered %r from group %r", component, group.name)
        return True

    def groups(self) -> list[RouteGroup]:
        """All groups in creation order."""
        return list(self._groups.values())

    def clear(self) -> None:
        """Forget every group and every registration."""
        self._groups.clear()
        self._seen = weakref.WeakSet()

    def __iter__(self) -> Iterator[RouteGroup]:
        return iter(self.groups())

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __len__(self) -> int:
        return len(self._groups)
