"""Process-local generation lock adapter."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from transcript_triage.application.ports.generation_lock import GenerationLock


class InMemoryGenerationLock(GenerationLock):
    """
    One asyncio lock per key; serializes upserts within a single process.

    A key's lock lives only while someone holds or waits on it, so the map
    stays bounded by the number of in-flight generations.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]
