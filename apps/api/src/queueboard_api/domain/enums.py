"""Enums for queueboard domain models."""

from enum import Enum


class EngineVersion(str, Enum):
    """Queue engine family the discovered queues belong to."""

    LEGACY = "BULL"  # Bull v3 key layout
    CURRENT = "BULLMQ"  # BullMQ key layout

    @classmethod
    def parse(cls, value: str) -> "EngineVersion":
        """Parse a configured engine name, case-insensitively."""
        normalized = value.strip().upper()
        for member in cls:
            if member.value == normalized or member.name == normalized:
                return member
        raise ValueError(
            f"Unknown queue engine '{value}'. Expected one of: "
            + ", ".join(member.value for member in cls)
        )


class ResetStatus(str, Enum):
    """Outcome of clearing a single queue."""

    SUCCESS = "success"
    ERROR = "error"


class DiscoveryState(str, Enum):
    """Lifecycle of the most recent discovery pass."""

    PENDING = "pending"  # Not finished yet
    READY = "ready"
    FAILED = "failed"
