"""Fixed-window rate limiter for outbound API requests.

Allows ``max_requests`` per ``window_seconds``. A request beyond the limit
is not rejected; ``acquire`` sleeps until the window it was assigned to
opens. Uses time.monotonic() for timing.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class FixedWindowRateLimiter:
    """Counts requests per fixed window and delays the overflow."""
    max_requests: int
    window_seconds: float
    window_start: float = field(default_factory=time.monotonic)
    count: int = 0

    def __post_init__(self):
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

    def reserve(self, now: Optional[float] = None) -> float:
        """Claim a slot and return how long to wait before using it."""
        if now is None:
            now = time.monotonic()

        if now - self.window_start >= self.window_seconds:
            self.window_start = now
            self.count = 0

        if self.count >= self.max_requests:
            # Full: the slot belongs to the next window
            self.window_start += self.window_seconds
            self.count = 0

        self.count += 1
        return max(0.0, self.window_start - now)

    async def acquire(self) -> None:
        wait = self.reserve()
        if wait > 0:
            logger.info("Rate limit reached, waiting %.2fs for next window", wait)
            await asyncio.sleep(wait)
