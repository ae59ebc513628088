"""
Per-key asyncio locks
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class _Slot:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class KeyedLock:
    """
    Набор asyncio.Lock, по одному на ключ.

    Ожидающие одного ключа проходят в порядке прихода (FIFO, как у
    asyncio.Lock). Запись о ключе удаляется, когда его больше никто не
    держит и не ждёт, поэтому число ключей не растёт бесконечно.
    """

    def __init__(self) -> None:
        self._slots: Dict[Hashable, _Slot] = {}

    @asynccontextmanager
    async def acquire(self, key: Hashable) -> AsyncIterator[None]:
        slot = self._slots.get(key)
        if slot is None:
            slot = self._slots[key] = _Slot()
        slot.users += 1
        try:
            async with slot.lock:
                yield
        finally:
            slot.users -= 1
            if slot.users == 0 and self._slots.get(key) is slot:
                del self._slots[key]

    def locked(self, key: Hashable) -> bool:
        slot = self._slots.get(key)
        return slot is not None and slot.lock.locked()

    def __len__(self) -> int:
        return len(self._slots)
