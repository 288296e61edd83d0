"""
Rate limiting for calls to the AI provider.

A fixed-window token bucket shared by every caller of the provider, and a
scheduler that waits out a rejection once before giving up.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from loguru import logger

from .config import Settings, get_settings
from .errors import QuotaExceeded

T = TypeVar("T")


@dataclass
class _BucketState:
    window_start: float
    consumed: int = 0
    blocked_until: float = 0.0


class TokenBucket:
    """
    In-memory rate limiter keyed by caller identity.

    Each key may consume `points` within a window of `duration` seconds.
    Going over the limit rejects the call and, when `block_duration` is set,
    blocks the key for that many seconds.
    """

    def __init__(
        self,
        points: int,
        duration: float,
        block_duration: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if points < 1:
            raise ValueError("points must be at least 1")
        self.points = points
        self.duration = duration
        self.block_duration = block_duration
        self._clock = clock
        self._state: dict[str, _BucketState] = {}

    def consume(self, key: str, points: int = 1) -> int:
        """
        Consume points for a key.

        Returns:
            Remaining points in the current window

        Raises:
            QuotaExceeded: with the milliseconds until the key can be used again
        """
        now = self._clock()
        state = self._state.get(key)

        if state is not None and state.blocked_until > now:
            raise QuotaExceeded(_to_ms(state.blocked_until - now))

        if state is None or now - state.window_start >= self.duration:
            state = _BucketState(window_start=now)
            self._state[key] = state

        state.consumed += points
        if state.consumed > self.points:
            if self.block_duration > 0:
                state.blocked_until = now + self.block_duration
                # The block outlives the window, restart counting after it
                state.window_start = state.blocked_until
                state.consumed = 0
                raise QuotaExceeded(_to_ms(self.block_duration))
            raise QuotaExceeded(_to_ms(state.window_start + self.duration - now))

        return self.points - state.consumed


def _to_ms(seconds: float) -> int:
    return max(0, int(round(seconds * 1000)))


class RateLimitedScheduler:
    """Runs provider calls through the shared token bucket."""

    def __init__(
        self,
        bucket: TokenBucket,
        key: str,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.bucket = bucket
        self.key = key
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RateLimitedScheduler":
        settings = settings or get_settings()
        bucket = TokenBucket(
            points=settings.rate_limit_points,
            duration=settings.rate_limit_duration_secs,
            block_duration=settings.rate_limit_block_secs,
        )
        return cls(bucket, key=settings.rate_limit_key)

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run an operation once quota allows.

        On a quota rejection (from the bucket or from the provider itself)
        the call is delayed by the advertised wait and attempted exactly once
        more. Any other error propagates unchanged.
        """
        try:
            self.bucket.consume(self.key)
            return await operation()
        except QuotaExceeded as e:
            logger.warning(
                f"Rate limit exceeded. Waiting {e.ms_before_next}ms before retrying..."
            )
            await self._sleep(e.ms_before_next / 1000)
            return await operation()
