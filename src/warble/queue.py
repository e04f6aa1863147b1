"""Reconciliation queue: at most one pass in flight.

Hooks are awaited, so a pass can be suspended for a long time. Without
a guard, a second navigation arriving meanwhile starts a second pass
that interleaves with the first and leaves groups half-updated.

``ReconciliationQueue`` serializes passes. The first caller drains the
queue: it runs its own pass, then every request that arrived while it
was running, strictly in arrival order. Later callers only enqueue and
return at once, which also means a hook that triggers navigation does
not deadlock on the pass that called it::

    queue = ReconciliationQueue(engine.reconcile_all)
    request = await queue.request(event)
    await request.wait()  # returns immediately if this caller drained it

If a pass raises, its ``PassRequest`` records the exception and draining
continues with the requests queued behind it. Once the queue is empty the
first exception is re-raised to the draining caller.
"""

import logging
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import anyio

logger = logging.getLogger("warble.queue")

PassRunner: TypeAlias = Callable[[Any], Awaitable[None]]


@dataclass(slots=True, eq=False)
class PassRequest:
    """One requested reconciliation pass."""

    event: Any = None
    done: anyio.Event = field(default_factory=anyio.Event)
    error: Exception | None = None

    @property
    def finished(self) -> bool:
        return self.done.is_set()

    async def wait(self) -> None:
        """Block until this request's pass has run (or failed)."""
        await self.done.wait()


class ReconciliationQueue:
    """Single-slot, FIFO queue of reconciliation passes."""

    __slots__ = ("_pending", "_running", "_runner")

    def __init__(self, runner: PassRunner) -> None:
        self._runner = runner
        self._pending: deque[PassRequest] = deque()
        self._running = False

    @property
    def in_flight(self) -> bool:
        return self._running

    def __len__(self) -> int:
        return len(self._pending)

    async def request(self, event: Any = None) -> PassRequest:
        """Queue a pass for *event*, draining the queue if it is idle."""
        request = PassRequest(event=event)
        self._pending.append(request)

        if self._running:
            logger.debug("Pass in flight, queued request (%d pending)", len(self._pending))
            return request

        self._running = True
        first_error: Exception | None = None
        try:
            while self._pending:
                current = self._pending.popleft()
                try:
                    await self._runner(current.event)
                except Exception as exc:
                    logger.debug("Pass failed for %r, draining %d pending", current.event, len(self._pending))
                    current.error = exc
                    if first_error is None:
                        first_error = exc
                finally:
                    current.done.set()
        finally:
            self._running = False

        if first_error is not None:
            raise first_error
        return request
