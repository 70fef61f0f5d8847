"""Tests for the Bull v3 queue client."""

from __future__ import annotations

import pytest
from conftest import FakeRedis

from queueboard_api.queue.legacy import LegacyQueue, LegacyQueueError, escape_glob
from queueboard_api.queue.protocol import QueueClient


def _seeded_redis() -> FakeRedis:
    redis = FakeRedis(["bull:orders:id", "bull:orders:1", "bull:orders:2", "bull:orders2:1"])
    redis.lists["bull:orders:wait"] = ["3", "4"]
    redis.lists["bull:orders:active"] = ["2"]
    redis.zsets["bull:orders:completed"] = {"1": 1.0}
    redis.zsets["bull:orders:failed"] = {}
    redis.lists["bull:other:wait"] = ["9"]
    return redis


def test_defaults_and_key_layout() -> None:
    queue = LegacyQueue("orders", {}, client=FakeRedis())

    assert queue.prefix == "bull"
    assert queue.to_key("wait") == "bull:orders:wait"
    assert isinstance(queue, QueueClient)


def test_custom_prefix() -> None:
    queue = LegacyQueue("orders", {"prefix": "jobs"}, client=FakeRedis())

    assert queue.to_key("active") == "jobs:orders:active"


@pytest.mark.asyncio
async def test_get_job_counts_all_states() -> None:
    queue = LegacyQueue("orders", {}, client=_seeded_redis())

    counts = await queue.getJobCounts()

    assert counts == {
        "waiting": 2,
        "active": 1,
        "completed": 1,
        "failed": 0,
        "delayed": 0,
        "paused": 0,
    }


@pytest.mark.asyncio
async def test_get_job_counts_selected_states() -> None:
    queue = LegacyQueue("orders", {}, client=_seeded_redis())

    assert await queue.getJobCounts("active", "waiting") == {"active": 1, "waiting": 2}


@pytest.mark.asyncio
async def test_get_job_counts_rejects_unknown_state() -> None:
    queue = LegacyQueue("orders", {}, client=_seeded_redis())

    with pytest.raises(ValueError, match="bogus"):
        await queue.getJobCounts("bogus")


@pytest.mark.asyncio
async def test_obliterate_refuses_active_queue_without_force() -> None:
    redis = _seeded_redis()
    queue = LegacyQueue("orders", {}, client=redis)

    with pytest.raises(LegacyQueueError, match="active"):
        await queue.obliterate()

    assert "bull:orders:wait" in redis.lists


@pytest.mark.asyncio
async def test_obliterate_force_removes_only_this_queue() -> None:
    redis = _seeded_redis()
    queue = LegacyQueue("orders", {}, client=redis)

    await queue.obliterate(force=True)

    assert sorted(redis.all_keys()) == ["bull:orders2:1", "bull:other:wait"]


@pytest.mark.asyncio
async def test_obliterate_idle_queue_without_force() -> None:
    redis = FakeRedis(["bull:idle:id"])
    queue = LegacyQueue("idle", {}, client=redis)

    await queue.obliterate()

    assert redis.all_keys() == []


@pytest.mark.asyncio
async def test_close_closes_client() -> None:
    redis = FakeRedis()
    await LegacyQueue("orders", {}, client=redis).close()

    assert redis.closed is True


def test_escape_glob() -> None:
    assert escape_glob("a*b?c[d]e\\") == "a\\*b\\?c\\[d\\]e\\\\"
    assert escape_glob("plain:name") == "plain:name"
