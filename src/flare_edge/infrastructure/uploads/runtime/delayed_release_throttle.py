"""Counting admission gate whose permits come back after a fixed delay."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

_DEFAULT_CAPACITY = 8
_DEFAULT_RELEASE_DELAY_SECONDS = 1.0


class DelayedReleaseThrottle:
    """Bound concurrent uploads and smooth their admission rate.

    A released permit only becomes available to the next waiter once
    `release_delay_seconds` have elapsed. `acquire` has no timeout: a permit
    that is never released stalls every later acquirer.
    """

    def __init__(
        self,
        capacity: int = _DEFAULT_CAPACITY,
        release_delay_seconds: float = _DEFAULT_RELEASE_DELAY_SECONDS,
    ) -> None:
        if capacity < 1:
            raise ValueError("Throttle capacity must be >= 1.")
        if release_delay_seconds < 0:
            raise ValueError("Throttle release delay must be >= 0.")
        self._capacity = capacity
        self._release_delay_seconds = release_delay_seconds
        self._slots = asyncio.Semaphore(capacity)
        self._in_use = 0

    @property
    def capacity(self) -> int:
        """Return the number of permits the throttle hands out."""

        return self._capacity

    @property
    def release_delay_seconds(self) -> float:
        return self._release_delay_seconds

    @property
    def in_use(self) -> int:
        """Permits acquired and not yet returned, delayed ones included."""

        return self._in_use

    async def acquire(self) -> None:
        """Wait until a permit is free and take it."""

        await self._slots.acquire()
        self._in_use += 1

    def release(self, *, delayed: bool = True) -> None:
        """Return a permit, after the release delay unless `delayed` is false."""

        if not delayed or self._release_delay_seconds == 0:
            self._return_permit()
            return

        asyncio.get_running_loop().call_later(self._release_delay_seconds, self._return_permit)

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""

        await self.acquire()
        try:
            yield
        finally:
            self.release()

    def _return_permit(self) -> None:
        self._in_use -= 1
        self._slots.release()


__all__ = ["DelayedReleaseThrottle"]
