"""
Async Gate - FIFO counting semaphore bounding in-flight translations

Unlike asyncio.Semaphore, a release hands its permit straight to the oldest
waiter instead of returning it to the pool, so a newcomer can never overtake
a queued caller.
"""

import asyncio
import logging
from collections import deque
from typing import Deque


logger = logging.getLogger(__name__)


class BoundedConcurrencyGate:
    """
    Admit at most `limit` concurrent holders, first-come first-served.

    Usage:
        gate = BoundedConcurrencyGate(4)

        await gate.acquire()
        try:
            ...
        finally:
            gate.release()

        # or
        async with gate:
            ...

    All state changes happen on the running event loop without suspending in
    between, so acquire/release need no extra locking by callers.
    """

    def __init__(self, limit: int):
        """
        Args:
            limit: Requested concurrency. Values below 1 are raised to 1.
        """
        self._limit = max(1, limit)
        self._permits = self._limit
        self._waiters: Deque[asyncio.Future] = deque()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def available(self) -> int:
        """Permits not currently held"""
        return self._permits

    @property
    def waiting(self) -> int:
        """Callers parked in the queue (cancelled ones excluded)"""
        return sum(1 for w in self._waiters if not w.done())

    async def acquire(self) -> None:
        """
        Take a permit, suspending until one is handed over if none is free.

        A caller that finds a free permit returns without suspending. Otherwise
        it is queued and resumed exactly once by a later release(); the
        resumption itself is the grant.
        """
        # Permits only accumulate while no live waiter is queued
        if self._permits > 0:
            self._permits -= 1
            return

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Permit was already handed over; pass it on
                self.release()
            else:
                try:
                    self._waiters.remove(waiter)
                except ValueError:
                    pass
            raise

    def release(self) -> None:
        """
        Return a permit: resume the oldest live waiter, or bump the count.

        Raises:
            ValueError: If called more times than acquire()
        """
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return

        if self._permits >= self._limit:
            raise ValueError("BoundedConcurrencyGate released too many times")
        self._permits += 1

    async def __aenter__(self) -> "BoundedConcurrencyGate":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"<BoundedConcurrencyGate limit={self._limit} "
            f"available={self._permits} waiting={self.waiting}>"
        )
