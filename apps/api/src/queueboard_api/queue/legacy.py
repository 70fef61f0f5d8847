"""Client for queues stored in the Bull v3 key layout.

There is no maintained Python client for Bull v3, so this module talks to
Redis directly. Only the operations the dashboard needs are provided.

Redis data structures (for queue ``<name>`` under prefix ``<prefix>``):
- <prefix>:<name>:wait - List of waiting job ids
- <prefix>:<name>:paused - List of job ids while the queue is paused
- <prefix>:<name>:active - List of running job ids
- <prefix>:<name>:delayed - Sorted set of delayed job ids
- <prefix>:<name>:completed / :failed - Sorted sets of finished job ids
- <prefix>:<name>:<job_id> - Hash with job data
- <prefix>:<name>:id, :meta-paused, ... - Queue metadata
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from redis.asyncio import Redis

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "bull"
DELETE_BATCH_SIZE = 1000

# state -> (key suffix, redis type)
_COUNT_KEYS: dict[str, tuple[str, str]] = {
    "waiting": ("wait", "list"),
    "active": ("active", "list"),
    "completed": ("completed", "zset"),
    "failed": ("failed", "zset"),
    "delayed": ("delayed", "zset"),
    "paused": ("paused", "list"),
}

_GLOB_SPECIAL = "\\*?[]"


def escape_glob(value: str) -> str:
    """Escape Redis MATCH glob metacharacters."""
    return "".join(f"\\{ch}" if ch in _GLOB_SPECIAL else ch for ch in value)


class LegacyQueueError(Exception):
    """Raised when a Bull v3 queue operation is refused."""


class LegacyQueue:
    """Bull v3 queue handle.

    Options are flat: ``host``, ``port``, ``db``, ``password``, ``tls`` and
    an optional ``prefix``. The connection is opened lazily on first use.
    """

    def __init__(
        self,
        name: str,
        opts: Mapping[str, Any] | None = None,
        *,
        client: Any = None,
    ) -> None:
        opts = dict(opts or {})
        self.name = name
        self.prefix: str = opts.get("prefix") or DEFAULT_PREFIX
        self.opts = opts
        if client is None:
            client = Redis(
                host=opts.get("host", "localhost"),
                port=int(opts.get("port", 6379)),
                db=int(opts.get("db", 0)),
                password=opts.get("password"),
                ssl=bool(opts.get("tls", False)),
                socket_connect_timeout=opts.get("connect_timeout"),
                decode_responses=True,
            )
        self._redis = client

    def to_key(self, suffix: str) -> str:
        return f"{self.prefix}:{self.name}:{suffix}"

    async def getJobCounts(self, *types: str) -> dict[str, int]:  # noqa: N802
        """Return job counts per state (all known states when none given)."""
        wanted = list(types) or list(_COUNT_KEYS)
        unknown = [t for t in wanted if t not in _COUNT_KEYS]
        if unknown:
            raise ValueError(f"Unknown job state(s): {', '.join(unknown)}")

        async with self._redis.pipeline(transaction=False) as pipe:
            for state in wanted:
                suffix, kind = _COUNT_KEYS[state]
                if kind == "list":
                    pipe.llen(self.to_key(suffix))
                else:
                    pipe.zcard(self.to_key(suffix))
            values = await pipe.execute()

        return {state: int(value or 0) for state, value in zip(wanted, values, strict=True)}

    async def obliterate(self, force: bool = False) -> None:
        """Delete every key that belongs to this queue.

        Without ``force`` the call is refused while jobs are active.
        """
        if not force:
            active = await self._redis.llen(self.to_key("active"))
            if active:
                raise LegacyQueueError(
                    f"Cannot obliterate queue '{self.name}' with {active} active job(s)"
                )

        pattern = escape_glob(f"{self.prefix}:{self.name}:") + "*"
        deleted = 0
        batch: list[str] = []
        async for key in self._redis.scan_iter(match=pattern, count=DELETE_BATCH_SIZE):
            batch.append(key)
            if len(batch) >= DELETE_BATCH_SIZE:
                deleted += await self._redis.unlink(*batch)
                batch = []
        if batch:
            deleted += await self._redis.unlink(*batch)

        logger.debug("Obliterated legacy queue %s (%d keys)", self.name, deleted)

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    def __repr__(self) -> str:
        return f"LegacyQueue(name={self.name!r}, prefix={self.prefix!r})"
