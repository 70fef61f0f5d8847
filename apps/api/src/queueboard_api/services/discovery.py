"""Discovery pass: scan the key-space and rebuild the queue registry."""

from __future__ import annotations

import asyncio
import logging
import time

from queueboard_api.domain.models import (
    DiscoveryFailed,
    DiscoveryReady,
    DiscoveryResult,
    QueueAdapter,
)
from queueboard_api.errors import AdapterConstructionError, DiscoveryError
from queueboard_api.observability.metrics import (
    DISCOVERY_DURATION,
    DISCOVERY_TOTAL,
    QUEUES_DISCOVERED,
)
from queueboard_api.services.adapter_factory import AdapterFactory
from queueboard_api.services.keyspace_scanner import KeyspaceScanner
from queueboard_api.services.queue_registry import QueueRegistry

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Runs discovery passes and owns the adapters it puts in the registry."""

    def __init__(
        self,
        *,
        scanner: KeyspaceScanner,
        factory: AdapterFactory,
        registry: QueueRegistry,
    ) -> None:
        self._scanner = scanner
        self._factory = factory
        self._registry = registry
        self._lock = asyncio.Lock()
        self._last_result: DiscoveryResult | None = None

    @property
    def registry(self) -> QueueRegistry:
        return self._registry

    @property
    def scanner(self) -> KeyspaceScanner:
        return self._scanner

    @property
    def factory(self) -> AdapterFactory:
        return self._factory

    @property
    def last_result(self) -> DiscoveryResult | None:
        """Result of the most recent pass, None while the first one runs."""
        return self._last_result

    async def run(self) -> DiscoveryResult:
        """Run one discovery pass.

        A scan failure leaves the registry untouched and yields DiscoveryFailed.
        Queues whose adapter cannot be built are skipped, not fatal.
        """
        async with self._lock:
            start = time.monotonic()
            result = await self._run_locked()
            DISCOVERY_DURATION.observe(time.monotonic() - start)
            DISCOVERY_TOTAL.labels(result=result.state.value).inc()
            self._last_result = result
            return result

    async def _run_locked(self) -> DiscoveryResult:
        logger.info(
            "Discovering queues under %r (engine %s)",
            self._scanner.prefix,
            self._factory.engine.value,
        )
        try:
            names = await self._scanner.scan()
        except DiscoveryError as e:
            logger.error("Queue discovery failed: %s", e.message)
            return DiscoveryFailed(reason=e.message)

        adapters: list[QueueAdapter] = []
        skipped: dict[str, str] = {}
        for name in names:
            try:
                adapters.append(self._factory.create(name))
            except AdapterConstructionError as e:
                logger.warning("Skipping queue %s: %s", name, e.message)
                skipped[name] = e.message

        previous = self._registry.replace(adapters)
        QUEUES_DISCOVERED.set(len(adapters))
        await _close_all(previous)

        logger.info(
            "Discovery finished: %d queue(s) registered, %d skipped", len(adapters), len(skipped)
        )
        return DiscoveryReady(queue_names=[a.name for a in adapters], skipped=skipped)

    async def close(self) -> None:
        """Release every registered adapter and the scanner connection."""
        async with self._lock:
            await _close_all(self._registry.current())
            await self._scanner.close()


async def _close_all(adapters: tuple[QueueAdapter, ...]) -> None:
    for adapter in adapters:
        try:
            await adapter.close()
        except Exception as e:
            logger.warning("Closing queue %s failed: %s", adapter.name, e)
