"""Lock striping for per-entity serialization."""

import asyncio
import zlib
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .config import settings


class StripedLock:
    """
    A fixed pool of ``asyncio.Lock`` objects addressed by key hash.

    Keys hashing to the same stripe share a lock, so unrelated keys may
    occasionally wait on each other, but equal keys always serialize.
    Locks are not reentrant: never acquire the same key twice in one task.
    Like any ``asyncio.Lock``, the pool belongs to the event loop that first
    contends on it; create a new pool for each event loop.
    """

    def __init__(self, stripes: int = settings.lock_stripes):
        if stripes < 1:
            raise ValueError("stripes must be at least 1")
        self._locks = [asyncio.Lock() for _ in range(stripes)]

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, key: str) -> asyncio.Lock:
        """Return the lock guarding ``key``."""
        return self._locks[zlib.crc32(key.encode("utf-8")) % len(self._locks)]

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        async with self.lock_for(key):
            yield
