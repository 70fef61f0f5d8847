"""Queue registry.

Holds the adapters produced by the latest discovery pass. Membership only
changes by full replacement: the visible list is an immutable tuple and a
replace rebinds the reference, so readers see either the previous or the
new list and never one under construction.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from queueboard_api.domain.models import QueueAdapter


class QueueRegistry:
    """Single-writer / multi-reader holder of the current adapter list."""

    def __init__(self) -> None:
        self._adapters: tuple[QueueAdapter, ...] = ()
        self._populated = False
        self._write_lock = threading.Lock()

    @property
    def populated(self) -> bool:
        """False until the first discovery pass has replaced the list."""
        return self._populated

    def current(self) -> tuple[QueueAdapter, ...]:
        """Return the presently visible adapters, sorted by queue name."""
        return self._adapters

    def names(self) -> list[str]:
        return [adapter.name for adapter in self._adapters]

    def replace(self, adapters: Iterable[QueueAdapter]) -> tuple[QueueAdapter, ...]:
        """Atomically swap in ``adapters`` and return the superseded list.

        The caller owns the returned adapters and is expected to close them.
        """
        new = tuple(sorted(adapters, key=lambda adapter: adapter.name))
        with self._write_lock:
            previous = self._adapters
            self._adapters = new
            self._populated = True
        return previous

    def __len__(self) -> int:
        return len(self._adapters)
