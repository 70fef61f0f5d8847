"""Pytest configuration and fixtures for queueboard API tests."""

from __future__ import annotations

import fnmatch
from collections.abc import AsyncIterator, Iterable
from typing import Any

import pytest

from queueboard_api.domain.enums import EngineVersion
from queueboard_api.domain.models import QueueAdapter
from queueboard_api.services.queue_registry import QueueRegistry


def _unescape_glob(pattern: str) -> str:
    # Redis escapes with backslashes, fnmatch with brackets
    out: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            out.append(f"[{nxt}]")
        else:
            out.append(ch)
    return "".join(out)


class FakeRedis:
    """In-memory stand-in for the subset of redis.asyncio.Redis we use."""

    def __init__(self, keys: Iterable[str] = (), *, scan_error: Exception | None = None) -> None:
        self.lists: dict[str, list[str]] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.strings: dict[str, str] = {k: "1" for k in keys}
        self.scan_error = scan_error
        self.scan_calls: list[tuple[str | None, int | None]] = []
        self.closed = False

    def all_keys(self) -> list[str]:
        return [*self.strings, *self.lists, *self.zsets]

    async def scan_iter(
        self, match: str | None = None, count: int | None = None
    ) -> AsyncIterator[str]:
        self.scan_calls.append((match, count))
        if self.scan_error is not None:
            raise self.scan_error
        glob = _unescape_glob(match) if match else "*"
        for key in list(self.all_keys()):
            if fnmatch.fnmatchcase(key, glob):
                yield key

    async def llen(self, key: str) -> int:
        return len(self.lists.get(key, []))

    async def zcard(self, key: str) -> int:
        return len(self.zsets.get(key, {}))

    async def unlink(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            for store in (self.strings, self.lists, self.zsets):
                if key in store:
                    del store[key]
                    removed += 1
        return removed

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)

    async def aclose(self) -> None:
        self.closed = True


class FakePipeline:
    def __init__(self, redis: FakeRedis) -> None:
        self._redis = redis
        self._commands: list[tuple[str, str]] = []

    async def __aenter__(self) -> FakePipeline:
        return self

    async def __aexit__(self, *exc: object) -> None:
        self._commands = []

    def llen(self, key: str) -> FakePipeline:
        self._commands.append(("llen", key))
        return self

    def zcard(self, key: str) -> FakePipeline:
        self._commands.append(("zcard", key))
        return self

    async def execute(self) -> list[int]:
        results = []
        for command, key in self._commands:
            results.append(await getattr(self._redis, command)(key))
        return results


class FakeQueue:
    """Queue client double recording calls."""

    def __init__(
        self,
        name: str,
        opts: dict[str, Any] | None = None,
        *,
        obliterate_error: Exception | None = None,
        counts: dict[str, int] | None = None,
        counts_error: Exception | None = None,
    ) -> None:
        self.name = name
        self.opts = opts or {}
        self.obliterate_error = obliterate_error
        self.counts = counts if counts is not None else {"waiting": 0, "active": 0}
        self.counts_error = counts_error
        self.obliterate_calls: list[bool] = []
        self.closed = False

    async def obliterate(self, force: bool = False) -> None:
        self.obliterate_calls.append(force)
        if self.obliterate_error is not None:
            raise self.obliterate_error

    async def getJobCounts(self, *types: str) -> dict[str, int]:  # noqa: N802
        if self.counts_error is not None:
            raise self.counts_error
        return dict(self.counts)

    async def close(self) -> None:
        self.closed = True


class RecordingConstructor:
    """Queue constructor that records (name, options) and returns FakeQueues."""

    def __init__(self, *, fail_for: Iterable[str] = ()) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.created: dict[str, FakeQueue] = {}
        self._fail_for = set(fail_for)

    def __call__(self, name: str, opts: dict[str, Any]) -> FakeQueue:
        self.calls.append((name, opts))
        if name in self._fail_for:
            raise ConnectionRefusedError(f"connection refused for {name}")
        queue = FakeQueue(name, opts)
        self.created[name] = queue
        return queue


def make_adapter(
    name: str,
    *,
    engine: EngineVersion = EngineVersion.CURRENT,
    **queue_kwargs: Any,
) -> QueueAdapter:
    return QueueAdapter(name=name, engine=engine, queue=FakeQueue(name, **queue_kwargs))


@pytest.fixture
def registry() -> QueueRegistry:
    return QueueRegistry()
