"""Invoke helpers: call sync or async callbacks uniformly.

Lifecycle hooks and event listeners can be ``def`` or ``async def``.
Any code that calls a user-provided callback must handle both cases.
This module keeps the sync/async check in exactly one place.

Usage::

    from warble._internal.invoke import invoke

    result = await invoke(hook, params, event)
"""

import inspect
from typing import Any


async def invoke(callback: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *callback* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def router_callback(self, params, event):
            self.record_id = params["id"]

        # async: awaited before the router moves on
        async def router_callback(self, params, event):
            self.record = await load(params["id"])
    """
    result = callback(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
