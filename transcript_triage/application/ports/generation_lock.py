"""Generation lock port."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class GenerationLock(ABC):
    """Port interface for per-transcript serialization of lead upserts."""

    @abstractmethod
    def hold(self, key: str) -> AbstractAsyncContextManager[None]:
        """
        Hold the lock for a key for the duration of an ``async with`` block.

        Args:
            key: Lock key (transcript id)

        Returns:
            Async context manager
        """
        pass
