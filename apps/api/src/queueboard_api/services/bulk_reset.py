"""Bulk reset executor.

Clears every queue in the registry with a forced obliterate. Failures are
isolated per queue: an error on one queue is recorded in its outcome and
processing continues with the next one. Only a failure to read the registry
itself makes the whole operation report that it could not be attempted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from queueboard_api.domain.enums import ResetStatus
from queueboard_api.domain.models import BulkResetResult, QueueAdapter, ResetOutcome
from queueboard_api.errors import ResetBatchError
from queueboard_api.observability.metrics import QUEUE_RESET_TOTAL
from queueboard_api.services.queue_registry import QueueRegistry

logger = logging.getLogger(__name__)

AdapterSource = Callable[[], tuple[QueueAdapter, ...]]


class BulkResetExecutor:
    """Runs the fleet-wide clear over the registry's current adapters."""

    def __init__(
        self,
        registry: QueueRegistry,
        *,
        max_concurrency: int = 1,
        source: AdapterSource | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._source = source or registry.current
        self._max_concurrency = max_concurrency
        self._running = 0

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    @property
    def is_running(self) -> bool:
        return self._running > 0

    def _snapshot(self) -> tuple[QueueAdapter, ...]:
        try:
            return tuple(self._source())
        except Exception as e:
            raise ResetBatchError(f"Could not read queue registry: {e}") from e

    async def reset_all(self) -> BulkResetResult:
        """Obliterate every registered queue; one outcome per queue, in registry order."""
        try:
            adapters = self._snapshot()
        except ResetBatchError as e:
            logger.error("Bulk reset not attempted: %s", e.message)
            return BulkResetResult(overall_attempted=False, per_queue=[], error=e.message)

        self._running += 1
        try:
            if self._max_concurrency == 1:
                outcomes = [await self._reset_one(adapter) for adapter in adapters]
            else:
                semaphore = asyncio.Semaphore(self._max_concurrency)

                async def _bounded(adapter: QueueAdapter) -> ResetOutcome:
                    async with semaphore:
                        return await self._reset_one(adapter)

                # gather preserves argument order
                outcomes = list(await asyncio.gather(*(_bounded(a) for a in adapters)))
        finally:
            self._running -= 1

        result = BulkResetResult(overall_attempted=True, per_queue=outcomes)
        logger.info(
            "Bulk reset finished: %d queue(s), %d failed",
            len(outcomes),
            len(result.failed),
        )
        return result

    async def _reset_one(self, adapter: QueueAdapter) -> ResetOutcome:
        try:
            await adapter.queue.obliterate(force=True)
        except Exception as e:
            logger.warning("Reset of queue %s failed: %s", adapter.name, e)
            QUEUE_RESET_TOTAL.labels(status=ResetStatus.ERROR.value).inc()
            return ResetOutcome(
                name=adapter.name,
                status=ResetStatus.ERROR,
                error=str(e) or type(e).__name__,
            )

        logger.info("Reset queue %s", adapter.name)
        QUEUE_RESET_TOTAL.labels(status=ResetStatus.SUCCESS.value).inc()
        return ResetOutcome(name=adapter.name, status=ResetStatus.SUCCESS)
