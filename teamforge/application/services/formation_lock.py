"""In-process guard: at most one team formation in flight per hackathon."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from teamforge.domain.errors import FormationInProgress


class HackathonLockRegistry:
    """One asyncio.Lock per hackathon id while a formation runs; a busy hackathon fails fast."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def active_count(self) -> int:
        return len(self._locks)

    def is_busy(self, hackathon_id: str) -> bool:
        lock = self._locks.get(hackathon_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, hackathon_id: str) -> AsyncIterator[None]:
        """Hold the hackathon's lock for the duration of the block.

        Raises:
            FormationInProgress: if another formation holds the lock.
        """
        lock = self._locks.setdefault(hackathon_id, asyncio.Lock())
        if lock.locked():
            raise FormationInProgress(hackathon_id)
        try:
            async with lock:
                yield
        finally:
            # hold() never waits on a locked lock, so no waiter is left behind
            if not lock.locked() and self._locks.get(hackathon_id) is lock:
                del self._locks[hackathon_id]
