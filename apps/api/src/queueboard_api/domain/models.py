"""Domain models for queueboard API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from queueboard_api.domain.enums import DiscoveryState, EngineVersion, ResetStatus

if TYPE_CHECKING:
    from queueboard_api.queue.protocol import QueueClient

# ============================================================
# Connection
# ============================================================


class ConnectionProfile(BaseModel):
    """Redis connection parameters shared by every queue adapter."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None
    tls: bool = False
    prefix: str | None = Field(None, description="Key namespace prefix for the queues")
    connect_timeout_seconds: float = 5.0


# ============================================================
# Adapter
# ============================================================


@dataclass
class QueueAdapter:
    """Client handle plus metadata for one discovered queue."""

    name: str
    engine: EngineVersion
    queue: QueueClient

    async def close(self) -> None:
        """Release the underlying queue client."""
        await self.queue.close()


# ============================================================
# Discovery
# ============================================================


@dataclass(frozen=True)
class DiscoveryReady:
    """Discovery finished and the registry was replaced."""

    queue_names: list[str]
    skipped: dict[str, str] = field(default_factory=dict)

    @property
    def state(self) -> DiscoveryState:
        return DiscoveryState.READY


@dataclass(frozen=True)
class DiscoveryFailed:
    """The key-space could not be enumerated; the registry was left untouched."""

    reason: str

    @property
    def state(self) -> DiscoveryState:
        return DiscoveryState.FAILED


DiscoveryResult = DiscoveryReady | DiscoveryFailed


class DiscoveryStatus(BaseModel):
    """Discovery status response."""

    state: DiscoveryState
    queue_names: list[str] = Field(default_factory=list)
    skipped: dict[str, str] = Field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def from_result(cls, result: DiscoveryResult | None) -> DiscoveryStatus:
        if result is None:
            return cls(state=DiscoveryState.PENDING)
        if isinstance(result, DiscoveryFailed):
            return cls(state=result.state, reason=result.reason)
        return cls(
            state=result.state,
            queue_names=list(result.queue_names),
            skipped=dict(result.skipped),
        )


# ============================================================
# Bulk reset
# ============================================================


class ResetOutcome(BaseModel):
    """Result of clearing one queue."""

    name: str
    status: ResetStatus
    error: str | None = None


class BulkResetResult(BaseModel):
    """Result of a bulk reset over every registered queue."""

    model_config = ConfigDict(populate_by_name=True)

    overall_attempted: bool = Field(..., alias="overallAttempted")
    per_queue: list[ResetOutcome] = Field(default_factory=list, alias="perQueue")
    error: str | None = Field(None, description="Set when the batch could not run at all")

    @property
    def failed(self) -> list[ResetOutcome]:
        return [o for o in self.per_queue if o.status == ResetStatus.ERROR]


# ============================================================
# Dashboard
# ============================================================


class QueueSummary(BaseModel):
    """One queue as presented by the dashboard."""

    name: str
    engine: EngineVersion
    counts: dict[str, int] | None = None
    error: str | None = None


class QueueListResponse(BaseModel):
    """Dashboard queue list."""

    populated: bool
    discovery: DiscoveryState
    discovery_error: str | None = Field(None, description="Reason of the last failed pass")
    queues: list[QueueSummary]
