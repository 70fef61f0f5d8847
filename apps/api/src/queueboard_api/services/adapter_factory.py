"""Adapter factory.

Turns a discovered queue name into a QueueAdapter whose client is configured
for the selected engine family. The two client families expect different
option shapes; a mismatched shape yields a handle that silently talks to the
wrong keys, so each family has its own option builder:

- CURRENT (bullmq): ``{"connection": {...}, "prefix": ...}``
- LEGACY (Bull v3): ``{"host": ..., "port": ..., ..., "prefix": ...}``
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from bullmq import Queue as BullMQQueue

from queueboard_api.domain.enums import EngineVersion
from queueboard_api.domain.models import ConnectionProfile, QueueAdapter
from queueboard_api.errors import AdapterConstructionError
from queueboard_api.queue.legacy import LegacyQueue
from queueboard_api.queue.protocol import QueueClient

logger = logging.getLogger(__name__)

QueueConstructor = Callable[[str, dict[str, Any]], QueueClient]
OptionsBuilder = Callable[[ConnectionProfile], dict[str, Any]]


def build_current_options(profile: ConnectionProfile) -> dict[str, Any]:
    """Options for a bullmq Queue: connection parameters nested under 'connection'."""
    connection: dict[str, Any] = {
        "host": profile.host,
        "port": profile.port,
        "db": profile.db,
        "ssl": profile.tls,
        "socket_connect_timeout": profile.connect_timeout_seconds,
    }
    if profile.password:
        connection["password"] = profile.password

    options: dict[str, Any] = {"connection": connection}
    if profile.prefix:
        options["prefix"] = profile.prefix
    return options


def build_legacy_options(profile: ConnectionProfile) -> dict[str, Any]:
    """Options for a LegacyQueue: flat connection parameters."""
    options: dict[str, Any] = {
        "host": profile.host,
        "port": profile.port,
        "db": profile.db,
        "tls": profile.tls,
        "connect_timeout": profile.connect_timeout_seconds,
    }
    if profile.password:
        options["password"] = profile.password
    if profile.prefix:
        options["prefix"] = profile.prefix
    return options


OPTION_BUILDERS: dict[EngineVersion, OptionsBuilder] = {
    EngineVersion.CURRENT: build_current_options,
    EngineVersion.LEGACY: build_legacy_options,
}

DEFAULT_CONSTRUCTORS: dict[EngineVersion, QueueConstructor] = {
    EngineVersion.CURRENT: BullMQQueue,
    EngineVersion.LEGACY: LegacyQueue,
}


class AdapterFactory:
    """Builds one QueueAdapter per queue name for a fixed engine and profile."""

    def __init__(
        self,
        profile: ConnectionProfile,
        engine: EngineVersion,
        *,
        constructors: Mapping[EngineVersion, QueueConstructor] | None = None,
    ) -> None:
        self._profile = profile
        self._engine = engine
        self._constructors = {**DEFAULT_CONSTRUCTORS, **(constructors or {})}

    @property
    def engine(self) -> EngineVersion:
        return self._engine

    def options(self) -> dict[str, Any]:
        """Client options for the configured engine (a fresh dict per call)."""
        return OPTION_BUILDERS[self._engine](self._profile)

    def create(self, name: str) -> QueueAdapter:
        """Build the adapter for ``name``.

        Raises:
            AdapterConstructionError: If the queue client could not be built.
        """
        construct = self._constructors[self._engine]
        try:
            queue = construct(name, self.options())
        except Exception as e:
            raise AdapterConstructionError(
                name,
                f"Could not create {self._engine.value} client for queue '{name}': {e}",
            ) from e

        logger.debug("Created %s adapter for queue %s", self._engine.value, name)
        return QueueAdapter(name=name, engine=self._engine, queue=queue)
