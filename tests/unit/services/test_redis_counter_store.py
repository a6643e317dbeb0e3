import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis

from lexintake.adapter.services.counter_store import RedisCounterStore
from lexintake.app.services.rate_limiter import RateLimiter


def make_store(eval_result=None, eval_error=None):
    client = MagicMock()
    client.eval = AsyncMock(return_value=eval_result, side_effect=eval_error)
    client.delete = AsyncMock(return_value=1)
    client.aclose = AsyncMock()
    return RedisCounterStore("redis://unused", client=client), client


@pytest.mark.asyncio
async def test_accepted_hit_is_parsed():
    store, client = make_store(eval_result=[1, 3, "1700000900.5"])

    state = await store.hit("signin:ip:1.2.3.4", limit=5, window_seconds=900, now=1_700_000_000.0)

    assert state.accepted is True
    assert state.count == 3
    assert state.reset_at == 1_700_000_900.5

    args = client.eval.call_args.args
    assert args[1] == 1
    assert args[2] == "ratelimit:signin:ip:1.2.3.4"
    assert args[3:7] == ("1700000000.0", "1699999100.0", "900", "5")


@pytest.mark.asyncio
async def test_denied_hit_is_parsed():
    store, _ = make_store(eval_result=[0, 5, "1700000120"])

    state = await store.hit("signin:ip:1.2.3.4", limit=5, window_seconds=900, now=1_700_000_000.0)

    assert state.accepted is False
    assert state.count == 5
    assert state.reset_at == 1_700_000_120.0


@pytest.mark.asyncio
async def test_each_hit_gets_a_distinct_member():
    store, client = make_store(eval_result=[1, 1, "0"])

    await store.hit("k", limit=5, window_seconds=60, now=100.0)
    await store.hit("k", limit=5, window_seconds=60, now=100.0)

    members = [call.args[7] for call in client.eval.call_args_list]
    assert members[0] != members[1]


@pytest.mark.asyncio
async def test_redis_outage_admits_and_logs(caplog):
    store, _ = make_store(eval_error=redis.ConnectionError("connection refused"))

    with caplog.at_level(logging.ERROR):
        state = await store.hit("signin:ip:1.2.3.4", limit=5, window_seconds=900, now=1_000.0)

    assert state.accepted is True
    assert state.reset_at == 1_900.0
    assert "admitting request" in caplog.text


@pytest.mark.asyncio
async def test_limiter_allows_during_redis_outage():
    store, _ = make_store(eval_error=redis.ConnectionError("connection refused"))
    limiter = RateLimiter(store, clock=lambda: 1_000.0)

    decision = await limiter.check("ip:1.2.3.4", "signin")

    assert decision.allowed is True


@pytest.mark.asyncio
async def test_reset_deletes_prefixed_key():
    store, client = make_store()

    await store.reset("signin:ip:1.2.3.4")

    client.delete.assert_awaited_once_with("ratelimit:signin:ip:1.2.3.4")


@pytest.mark.asyncio
async def test_reset_failure_is_logged_not_raised(caplog):
    store, client = make_store()
    client.delete.side_effect = redis.ConnectionError("connection refused")

    with caplog.at_level(logging.ERROR):
        await store.reset("signin:ip:1.2.3.4")

    assert "Failed to reset key" in caplog.text


@pytest.mark.asyncio
async def test_close_releases_client():
    store, client = make_store()

    await store.close()

    client.aclose.assert_awaited_once()
