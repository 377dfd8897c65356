"""FIFO request gate for the single-session iT600 gateway."""

from __future__ import annotations

import asyncio
from collections import deque
from types import TracebackType


class RequestSerializer:
    """Let exactly one exchange talk to the gateway at a time.

    Waiters are resumed strictly in arrival order. Ownership is handed over
    directly on release, so a newcomer can never overtake a queued waiter.
    """

    def __init__(self) -> None:
        self._waiters: deque[asyncio.Future[None]] = deque()
        self._locked = False

    def locked(self) -> bool:
        """Return True while some caller holds the gate."""
        return self._locked

    @property
    def waiting(self) -> int:
        """Number of callers suspended in the queue."""
        return sum(1 for waiter in self._waiters if not waiter.done())

    async def acquire(self) -> None:
        """Suspend until the gate is ours."""
        if not self._locked:
            self._locked = True
            return

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Ownership arrived together with the cancellation.
                self.release()
            elif waiter in self._waiters:
                self._waiters.remove(waiter)
            raise

    def release(self) -> None:
        """Hand the gate to the longest waiter, or mark it free."""
        if not self._locked:
            raise RuntimeError("RequestSerializer released while not held")

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return

        self._locked = False

    async def __aenter__(self) -> None:
        await self.acquire()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
