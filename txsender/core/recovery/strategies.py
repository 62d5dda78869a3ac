"""
Retry Strategies

Exponential backoff shared by the transaction broadcaster and the JSON-RPC
provider. An attempt signals "try again" by returning ``None``; raising
aborts immediately.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 12
    initial_delay_seconds: float = 0.5
    exponential_base: float = 1.5
    max_delay_seconds: Optional[float] = None
    jitter: bool = False
    jitter_factor: float = 0.1

    @classmethod
    def from_millis(cls, max_attempts: int, initial_wait_ms: int, backoff: float) -> "RetryConfig":
        return cls(
            max_attempts=max_attempts,
            initial_delay_seconds=initial_wait_ms / 1000,
            exponential_base=backoff,
        )

    def get_delay(self, attempt: int) -> float:
        """Calculate delay after a given (zero-based) attempt."""
        delay = self.initial_delay_seconds * (self.exponential_base ** attempt)
        if self.max_delay_seconds is not None:
            delay = min(delay, self.max_delay_seconds)
        if self.jitter:
            jitter_range = delay * self.jitter_factor
            delay += random.uniform(-jitter_range, jitter_range)
        return max(delay, 0)


async def exponential_backoff(
    config: RetryConfig,
    get_result: Callable[[], Awaitable[Optional[T]]],
) -> Optional[T]:
    """
    Call ``get_result`` until it returns something other than ``None``.

    Sleeps between attempts only, never after the last one. Returns
    ``None`` when every attempt asked for a retry.
    """
    for attempt in range(config.max_attempts):
        result = await get_result()
        if result is not None:
            return result

        if attempt < config.max_attempts - 1:
            await asyncio.sleep(config.get_delay(attempt))

    return None
