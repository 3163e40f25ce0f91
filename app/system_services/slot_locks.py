# app/system_services/slot_locks.py
import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class SlotLockRegistry:
    """
    Per-doctor mutual exclusion for availability read-modify-write sequences.

    A doctor's whole availability list is rewritten on every slot change, so
    booking, cancellation and availability edits for one doctor are
    serialized within this process. Different doctors never wait on each other.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._waiters: Dict[int, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, doctor_id: int) -> AsyncIterator[None]:
        self._waiters[doctor_id] += 1
        try:
            async with self._locks[doctor_id]:
                yield
        finally:
            self._waiters[doctor_id] -= 1
            if self._waiters[doctor_id] == 0:
                # Nobody else queued on this doctor; drop it so the registry stays small
                del self._waiters[doctor_id]
                del self._locks[doctor_id]

    def __len__(self) -> int:
        return len(self._locks)
