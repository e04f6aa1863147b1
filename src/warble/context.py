"""Router context via ContextVar.

Provides ``router_var``, the ``Router`` for the current task. It is set
by ``async with Router(...)`` and reset on exit, so components can
register themselves without a global::

    from warble.context import get_router

    class PageUser(Element):
        page_path = "/users/:id"

        async def connected(self):
            await get_router().register(self)

``ContextVar`` is task-local under asyncio, so two routers (for example
in parallel tests) never see each other.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warble.router import Router

router_var: ContextVar[Router] = ContextVar("warble_router")
"""The current router. Set by ``Router.__aenter__``."""


def get_router() -> Router:
    """Return the current router.

    Raises ``LookupError`` if called outside ``async with Router(...)``.
    """
    return router_var.get()
