"""Bound on simultaneously open browser instances."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RenderLimiter:
    """
    Counting semaphore for render slots.

    One instance per application. Waiters queue; nothing is rejected.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._active = 0

    @property
    def active(self) -> int:
        return self._active

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        async with self._semaphore:
            self._active += 1
            try:
                yield
            finally:
                self._active -= 1
