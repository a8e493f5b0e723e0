"""
Keyed in-process lock

One anyio lock per key, created on first use and dropped when the last
holder releases it. Used to serialize check-then-write sequences on the same
seat/slot while letting different seats proceed concurrently.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Dict, Hashable

import anyio

from src.platform.logging.loguru_io import Logger


class _Entry:
    __slots__ = ('lock', 'holders')

    def __init__(self) -> None:
        self.lock = anyio.Lock()
        self.holders = 0


class KeyedLock:
    def __init__(self) -> None:
        self._entries: Dict[Hashable, _Entry] = {}

    @asynccontextmanager
    async def hold(self, *, key: Hashable) -> AsyncIterator[None]:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        entry.holders += 1
        try:
            async with entry.lock:
                Logger.base.debug(f'🔒 [LOCK] Acquired lock: {key}')
                yield
        finally:
            entry.holders -= 1
            if not entry.holders:
                self._entries.pop(key, None)
            Logger.base.debug(f'🔓 [LOCK] Released lock: {key}')

    def __len__(self) -> int:
        return len(self._entries)
