"""
Fixed-window rate limiting per client IP.

Counters live in the slowapi limiter's storage. A request that finds its
window exhausted may wait for the next window if fewer than ``queue_limit``
requests for the same policy and client are already waiting; otherwise it is
rejected with 429.
"""
import asyncio
import logging
import math
import time

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from inventory.config import settings
from inventory.core.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
    storage_uri="memory://",
)


class RateLimitPolicy:
    def __init__(self, name: str, limit: str, queue_limit: int = 0):
        self.name = name
        self.item = parse(limit)
        self.queue_limit = queue_limit
        self._waiting: dict[str, int] = {}

    def _hit(self, key: str) -> bool:
        return limiter.limiter.hit(self.item, self.name, key)

    def _seconds_until_reset(self, key: str) -> float:
        stats = limiter.limiter.get_window_stats(self.item, self.name, key)
        return max(stats.reset_time - time.time(), 0.0)

    def retry_after(self, key: str) -> int:
        return max(1, math.ceil(self._seconds_until_reset(key)))

    async def acquire(self, key: str) -> None:
        if self._hit(key):
            return

        if self._waiting.get(key, 0) >= self.queue_limit:
            raise RateLimitExceededError(self.name, self.retry_after(key))

        self._waiting[key] = self._waiting.get(key, 0) + 1
        try:
            delay = self._seconds_until_reset(key)
            logger.info("Queueing request for %s on policy %s for %.2fs", key, self.name, delay)
            await asyncio.sleep(delay + 0.01)
        finally:
            self._waiting[key] -= 1
            if self._waiting[key] <= 0:
                del self._waiting[key]

        if not self._hit(key):
            raise RateLimitExceededError(self.name, self.retry_after(key))


def build_policies() -> dict[str, RateLimitPolicy]:
    return {
        "general": RateLimitPolicy("general", settings.RATE_LIMIT_GENERAL, settings.RATE_LIMIT_GENERAL_QUEUE),
        "external": RateLimitPolicy("external", settings.RATE_LIMIT_EXTERNAL, settings.RATE_LIMIT_EXTERNAL_QUEUE),
        "bulk": RateLimitPolicy("bulk", settings.RATE_LIMIT_BULK, settings.RATE_LIMIT_BULK_QUEUE),
    }


POLICIES = build_policies()


def rate_limit(policy_name: str):
    """Router dependency enforcing the named policy."""

    async def enforce(request: Request) -> None:
        await POLICIES[policy_name].acquire(get_remote_address(request))

    return enforce
