import asyncio

import pytest

from lexintake.adapter.services.counter_store import MemoryCounterStore
from lexintake.app.services.rate_limiter import (
    DEFAULT_POLICIES,
    RateLimiter,
    RateLimitPolicy,
    build_policies,
)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    policies = {"signin": RateLimitPolicy(limit=5, window_seconds=900)}
    return RateLimiter(MemoryCounterStore(), policies=policies, clock=clock)


@pytest.mark.asyncio
async def test_admits_up_to_quota_then_denies(limiter):
    decisions = [await limiter.check("ip:1.2.3.4", "signin") for _ in range(6)]

    assert [d.allowed for d in decisions] == [True] * 5 + [False]
    assert decisions[0].remaining == 4
    assert decisions[4].remaining == 0
    assert decisions[5].retry_after > 0


@pytest.mark.asyncio
async def test_retry_after_counts_down_to_oldest_hit_expiry(limiter, clock):
    for _ in range(5):
        await limiter.check("ip:1.2.3.4", "signin")
    clock.now += 600

    denied = await limiter.check("ip:1.2.3.4", "signin")

    assert not denied.allowed
    assert denied.retry_after == 301


@pytest.mark.asyncio
async def test_window_slides(limiter, clock):
    for _ in range(5):
        await limiter.check("ip:1.2.3.4", "signin")

    clock.now += 901
    decision = await limiter.check("ip:1.2.3.4", "signin")

    assert decision.allowed


@pytest.mark.asyncio
async def test_identities_are_counted_separately(limiter):
    for _ in range(5):
        await limiter.check("ip:1.2.3.4", "signin")

    assert (await limiter.check("ip:5.6.7.8", "signin")).allowed
    assert not (await limiter.check("ip:1.2.3.4", "signin")).allowed


@pytest.mark.asyncio
async def test_concurrent_hits_never_exceed_quota(limiter):
    decisions = await asyncio.gather(*(limiter.check("apikey:sk_abc", "signin") for _ in range(25)))

    assert sum(1 for d in decisions if d.allowed) == 5


@pytest.mark.asyncio
async def test_disabled_limiter_always_admits(clock):
    limiter = RateLimiter(MemoryCounterStore(), enabled=False, clock=clock)

    decisions = [await limiter.check("ip:1.2.3.4", "signin") for _ in range(20)]

    assert all(d.allowed for d in decisions)


@pytest.mark.asyncio
async def test_unknown_operation_class(limiter):
    with pytest.raises(KeyError):
        await limiter.check("ip:1.2.3.4", "bulk_upload")


def test_identity_prefers_api_key():
    assert RateLimiter.identity_for("sk_0011aabb", "1.2.3.4") == "apikey:sk_0011aabb"
    assert RateLimiter.identity_for(None, "1.2.3.4") == "ip:1.2.3.4"
    assert RateLimiter.identity_for(None, None) == "ip:unknown"


def test_config_overrides_merge_over_defaults():
    policies = build_policies({"signin": [3, 60]})

    assert policies["signin"] == RateLimitPolicy(3, 60)
    assert policies["aml_check"] == DEFAULT_POLICIES["aml_check"]


@pytest.mark.asyncio
async def test_memory_store_sweeps_idle_keys():
    store = MemoryCounterStore(sweep_interval=0)
    await store.hit("signin:ip:1", limit=5, window_seconds=10, now=100.0)
    await store.hit("signin:ip:2", limit=5, window_seconds=10, now=105.0)

    await store.hit("signin:ip:2", limit=5, window_seconds=10, now=111.0)

    assert len(store) == 1
