"""Generation lock adapters."""

from transcript_triage.adapters.outbound.generation_lock.in_memory_generation_lock import (
    InMemoryGenerationLock,
)
from transcript_triage.adapters.outbound.generation_lock.noop_generation_lock import (
    NoOpGenerationLock,
)
from transcript_triage.adapters.outbound.generation_lock.redis_generation_lock import (
    RedisGenerationLock,
)

__all__ = [
    "InMemoryGenerationLock",
    "NoOpGenerationLock",
    "RedisGenerationLock",
]
