"""No-op generation lock adapter for when locking is disabled."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from transcript_triage.application.ports.generation_lock import GenerationLock


class NoOpGenerationLock(GenerationLock):
    """No-op adapter that never blocks."""

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Enter immediately.

        Args:
            key: Lock key (ignored)
        """
        yield
