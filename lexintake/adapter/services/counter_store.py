import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Optional

import redis.asyncio as redis_async

from lexintake.app.services.rate_limiter import CounterStore, WindowState

logger = logging.getLogger(__name__)


class MemoryCounterStore(CounterStore):
    """
    In-process sliding window log.

    Good for a single instance; counters are lost on restart. Entries whose
    window has passed are dropped on the next sweep.
    """

    def __init__(self, sweep_interval: float = 60.0):
        # key -> hit timestamps, key -> window seconds
        self._hits: Dict[str, List[float]] = defaultdict(list)
        self._windows: Dict[str, int] = {}
        self._lock = asyncio.Lock()
        self._sweep_interval = sweep_interval
        self._last_sweep: Optional[float] = None

    def _sweep(self, now: float) -> None:
        if self._last_sweep is not None and now - self._last_sweep < self._sweep_interval:
            return
        self._last_sweep = now

        expired = []
        for key, timestamps in self._hits.items():
            window_start = now - self._windows.get(key, 0)
            live = [ts for ts in timestamps if ts > window_start]
            if live:
                self._hits[key] = live
            else:
                expired.append(key)

        for key in expired:
            del self._hits[key]
            self._windows.pop(key, None)

    async def hit(self, key: str, limit: int, window_seconds: int, now: float) -> WindowState:
        async with self._lock:
            self._sweep(now)

            window_start = now - window_seconds
            timestamps = [ts for ts in self._hits[key] if ts > window_start]
            self._windows[key] = window_seconds

            if timestamps:
                reset_at = min(timestamps) + window_seconds
            else:
                reset_at = now + window_seconds

            if len(timestamps) < limit:
                timestamps.append(now)
                self._hits[key] = timestamps
                return WindowState(accepted=True, count=len(timestamps), reset_at=reset_at)

            self._hits[key] = timestamps
            return WindowState(accepted=False, count=len(timestamps), reset_at=reset_at)

    async def reset(self, key: str) -> None:
        async with self._lock:
            self._hits.pop(key, None)
            self._windows.pop(key, None)

    def __len__(self) -> int:
        return len(self._hits)


# Remove stale hits, count, admit if under quota; runs atomically in Redis.
_SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window_start = tonumber(ARGV[2])
local window_seconds = tonumber(ARGV[3])
local limit = tonumber(ARGV[4])
local member = ARGV[5]

redis.call('ZREMRANGEBYSCORE', key, '-inf', window_start)
local count = redis.call('ZCARD', key)

local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
local reset_at
if #oldest > 0 then
    reset_at = tonumber(oldest[2]) + window_seconds
else
    reset_at = now + window_seconds
end

if count < limit then
    redis.call('ZADD', key, now, member)
    redis.call('EXPIRE', key, window_seconds + 60)
    return {1, count + 1, tostring(reset_at)}
end
return {0, count, tostring(reset_at)}
"""


class RedisCounterStore(CounterStore):
    """
    Sorted-set sliding window shared by every instance.

    Fails open: if Redis cannot be reached the hit is admitted and the error
    logged.
    """

    def __init__(self, redis_url: str, key_prefix: str = "ratelimit", client=None):
        self._redis_url = redis_url
        self._key_prefix = key_prefix
        self._redis = client
        self._sequence = 0

    async def _get_redis(self):
        if self._redis is None:
            self._redis = redis_async.from_url(
                self._redis_url, encoding="utf-8", decode_responses=True
            )
            logger.info("[RATE_LIMIT] Connected to Redis")
        return self._redis

    async def hit(self, key: str, limit: int, window_seconds: int, now: float) -> WindowState:
        self._sequence += 1
        member = f"{now}:{id(self)}:{self._sequence}"
        try:
            redis_client = await self._get_redis()
            result = await redis_client.eval(
                _SLIDING_WINDOW_SCRIPT,
                1,
                f"{self._key_prefix}:{key}",
                str(now),
                str(now - window_seconds),
                str(window_seconds),
                str(limit),
                member,
            )
            return WindowState(
                accepted=bool(int(result[0])),
                count=int(result[1]),
                reset_at=float(result[2]),
            )
        except Exception as e:
            logger.error(f"[RATE_LIMIT] Redis error, admitting request: {e}")
            return WindowState(accepted=True, count=0, reset_at=now + window_seconds)

    async def reset(self, key: str) -> None:
        try:
            redis_client = await self._get_redis()
            await redis_client.delete(f"{self._key_prefix}:{key}")
        except Exception as e:
            logger.error(f"[RATE_LIMIT] Failed to reset key {key}: {e}")

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
