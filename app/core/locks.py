"""In-process locks keyed by an arbitrary hashable (pairing id, normalised user pair).

Each key gets its own ``asyncio.Lock`` so unrelated pairings never contend.
Locks are held weakly: once nobody holds or waits on a key, its lock is dropped.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLocks:
    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[Hashable, asyncio.Lock] = weakref.WeakValueDictionary()

    def get(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Serialize the block against every other holder of ``key``."""
        lock = self.get(key)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


# Guards check-then-create of a pairing for one unordered user pair
pair_locks = KeyedLocks()

# Guards status transitions and message appends for one pairing
pairing_locks = KeyedLocks()
