"""Key-space scanner.

Queues never register themselves anywhere; they only exist as keys of the
form ``<prefix>:<queue name>:<suffix...>`` in the shared Redis store. This
module enumerates those keys and extracts the distinct queue names.
"""

from __future__ import annotations

import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from queueboard_api.domain.models import ConnectionProfile
from queueboard_api.errors import DiscoveryError
from queueboard_api.queue.legacy import DEFAULT_PREFIX, escape_glob

logger = logging.getLogger(__name__)

SEPARATOR = ":"


def extract_queue_name(key: str, prefix: str) -> str | None:
    """Return the queue name encoded in ``key``, or None if it has none.

    Only keys with at least one segment after the queue name count; a bare
    ``<prefix>:<name>`` key carries no queue structure.
    """
    head = prefix + SEPARATOR
    if not key.startswith(head):
        return None
    name, sep, suffix = key[len(head) :].partition(SEPARATOR)
    if not name or not sep or not suffix:
        return None
    return name


class KeyspaceScanner:
    """Discovers queue names by scanning ``<prefix>:*`` keys."""

    def __init__(self, client: Any, *, prefix: str | None = None, scan_count: int = 1000) -> None:
        self._client = client
        self._prefix = prefix or DEFAULT_PREFIX
        self._scan_count = scan_count

    @classmethod
    def from_profile(cls, profile: ConnectionProfile, *, scan_count: int = 1000) -> KeyspaceScanner:
        """Create a scanner with its own Redis client for ``profile``."""
        client = Redis(
            host=profile.host,
            port=profile.port,
            db=profile.db,
            password=profile.password,
            ssl=profile.tls,
            socket_connect_timeout=profile.connect_timeout_seconds,
            decode_responses=True,
        )
        return cls(client, prefix=profile.prefix, scan_count=scan_count)

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def pattern(self) -> str:
        return escape_glob(self._prefix + SEPARATOR) + "*"

    async def scan(self) -> list[str]:
        """Return the sorted, distinct queue names present in the store.

        Raises:
            DiscoveryError: If the store could not be enumerated.
        """
        names: set[str] = set()
        try:
            async for key in self._client.scan_iter(match=self.pattern, count=self._scan_count):
                if isinstance(key, bytes):
                    key = key.decode("utf-8", errors="replace")
                name = extract_queue_name(key, self._prefix)
                if name is not None:
                    names.add(name)
        except (RedisError, OSError) as e:
            raise DiscoveryError(
                f"Could not enumerate keys matching '{self.pattern}': {e}",
                details={"prefix": self._prefix},
            ) from e

        return sorted(names)

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
