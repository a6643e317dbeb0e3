"""
Rate Limiter

Sliding-window limits per (identity, operation class). Counter storage is an
injected CounterStore so the same call sites work with an in-process map for
a single instance or Redis for several.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitPolicy:
    limit: int
    window_seconds: int


@dataclass(frozen=True)
class WindowState:
    """What the store saw for one hit"""

    accepted: bool
    count: int  # hits inside the window, including this one if accepted
    reset_at: float  # unix time at which the oldest hit leaves the window


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: int  # seconds; 0 when allowed


# operation class -> (quota, window seconds)
DEFAULT_POLICIES: Dict[str, RateLimitPolicy] = {
    "signin": RateLimitPolicy(limit=5, window_seconds=15 * 60),
    "aml_check": RateLimitPolicy(limit=100, window_seconds=24 * 60 * 60),
    "public_lead": RateLimitPolicy(limit=10, window_seconds=60 * 60),
    "leads": RateLimitPolicy(limit=100, window_seconds=60 * 60),
    "sensitive": RateLimitPolicy(limit=10, window_seconds=10 * 60),
    "external_api": RateLimitPolicy(limit=1000, window_seconds=60 * 60),
    # per client address, before the presented key is validated
    "api_key_auth": RateLimitPolicy(limit=300, window_seconds=60),
}


class CounterStore(ABC):
    """Atomic hit-with-expiry primitive backing the limiter."""

    @abstractmethod
    async def hit(self, key: str, limit: int, window_seconds: int, now: float) -> WindowState:
        """
        Record a hit for key if fewer than limit hits fall inside the window
        ending at now. Must be atomic with respect to concurrent callers.
        """
        pass

    @abstractmethod
    async def reset(self, key: str) -> None:
        pass


def build_policies(overrides: Optional[Mapping[str, Tuple[int, int]]] = None) -> Dict[str, RateLimitPolicy]:
    """Merge RATE_LIMITS config ({class: [limit, window_seconds]}) over the defaults."""
    policies = dict(DEFAULT_POLICIES)
    for operation_class, (limit, window_seconds) in (overrides or {}).items():
        policies[operation_class] = RateLimitPolicy(int(limit), int(window_seconds))
    return policies


class RateLimiter:
    def __init__(
        self,
        store: CounterStore,
        policies: Optional[Mapping[str, RateLimitPolicy]] = None,
        enabled: bool = True,
        clock=None,
    ):
        self.store = store
        self.policies = dict(policies or DEFAULT_POLICIES)
        self.enabled = enabled
        self._clock = clock or time.time

    async def check(self, identity_key: str, operation_class: str) -> RateLimitDecision:
        policy = self.policies.get(operation_class)
        if policy is None:
            raise KeyError(f"Unknown rate limit class: {operation_class}")

        now = self._clock()
        if not self.enabled:
            return RateLimitDecision(
                allowed=True,
                limit=policy.limit,
                remaining=policy.limit,
                reset_at=now + policy.window_seconds,
                retry_after=0,
            )

        key = f"{operation_class}:{identity_key}"
        state = await self.store.hit(key, policy.limit, policy.window_seconds, now)

        if state.accepted:
            return RateLimitDecision(
                allowed=True,
                limit=policy.limit,
                remaining=max(0, policy.limit - state.count),
                reset_at=state.reset_at,
                retry_after=0,
            )

        retry_after = max(1, int(state.reset_at - now) + 1)
        logger.warning(f"[RATE_LIMIT] Exceeded {operation_class} for {identity_key}")
        return RateLimitDecision(
            allowed=False,
            limit=policy.limit,
            remaining=0,
            reset_at=state.reset_at,
            retry_after=retry_after,
        )

    @staticmethod
    def identity_for(api_key_prefix: Optional[str], client_ip: Optional[str]) -> str:
        """apikey:<prefix> for a validated key, otherwise the network address."""
        if api_key_prefix:
            return f"apikey:{api_key_prefix}"
        return f"ip:{client_ip or 'unknown'}"
