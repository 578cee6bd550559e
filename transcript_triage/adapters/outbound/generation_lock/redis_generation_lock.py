"""Redis generation lock adapter."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from redis import asyncio as aioredis

from transcript_triage.application.ports.generation_lock import GenerationLock


class RedisGenerationLock(GenerationLock):
    """Redis adapter that serializes lead upserts across service instances."""

    KEY_PREFIX = "transcript_triage:lead_generation:"

    def __init__(self, redis_url: str, ttl_seconds: int = 120) -> None:
        """
        Initialize Redis generation lock.

        Args:
            redis_url: Redis connection URL
            ttl_seconds: Lock expiry, so a crashed holder cannot block forever
        """
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, key: str) -> str:
        """
        Make Redis key for a transcript lock.

        Args:
            key: Transcript identifier

        Returns:
            Redis key string
        """
        return f"{self.KEY_PREFIX}{key}"

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Hold the Redis lock for a transcript.

        Args:
            key: Transcript identifier
        """
        client = await self._get_client()
        async with client.lock(self._make_key(key), timeout=self._ttl_seconds):
            yield

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
