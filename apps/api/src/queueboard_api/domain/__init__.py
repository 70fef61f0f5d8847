"""Domain models for queueboard API."""

from queueboard_api.domain.enums import EngineVersion, ResetStatus
from queueboard_api.domain.models import (
    BulkResetResult,
    ConnectionProfile,
    QueueAdapter,
    ResetOutcome,
)

__all__ = [
    "EngineVersion",
    "ResetStatus",
    "BulkResetResult",
    "ConnectionProfile",
    "QueueAdapter",
    "ResetOutcome",
]
