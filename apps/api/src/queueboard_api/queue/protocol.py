"""QueueClient protocol definition.

The method names follow the ``bullmq`` Python client, which is the
reference implementation; LegacyQueue exposes the same surface.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class QueueClient(Protocol):
    """Handle for one queue, as used by the dashboard and bulk reset."""

    name: str

    async def obliterate(self, force: bool = False) -> Any:
        """Remove every job and all metadata of the queue.

        Args:
            force: Also remove the queue while jobs are active.
        """
        ...

    async def getJobCounts(self, *types: str) -> dict[str, int]:  # noqa: N802
        """Return job counts per state."""
        ...

    async def close(self) -> None:
        """Release the client connection."""
        ...
