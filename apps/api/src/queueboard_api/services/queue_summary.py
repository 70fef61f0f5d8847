"""Per-queue job counts for the dashboard."""

from __future__ import annotations

import asyncio
import logging

from queueboard_api.domain.models import QueueAdapter, QueueSummary

logger = logging.getLogger(__name__)


async def summarize(adapter: QueueAdapter) -> QueueSummary:
    """Read job counts for one queue; a failing queue reports its error instead."""
    try:
        counts = await adapter.queue.getJobCounts()
    except Exception as e:
        logger.warning("Could not read job counts for queue %s: %s", adapter.name, e)
        return QueueSummary(name=adapter.name, engine=adapter.engine, error=str(e))
    return QueueSummary(
        name=adapter.name,
        engine=adapter.engine,
        counts={state: int(count) for state, count in counts.items()},
    )


async def summarize_all(
    adapters: tuple[QueueAdapter, ...], *, max_concurrency: int = 8
) -> list[QueueSummary]:
    """Summaries in registry order, at most ``max_concurrency`` reads in flight."""
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _bounded(adapter: QueueAdapter) -> QueueSummary:
        async with semaphore:
            return await summarize(adapter)

    return list(await asyncio.gather(*(_bounded(adapter) for adapter in adapters)))
