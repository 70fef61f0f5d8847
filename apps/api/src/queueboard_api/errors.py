"""Application error types for consistent API error handling.

This module defines a small exception hierarchy for domain/service errors.
These exceptions are converted to consistent HTTP responses by the global
exception handlers installed in `queueboard_api.error_handling`.
"""

from __future__ import annotations

from typing import Any


class QueueboardError(Exception):
    """Base exception for predictable application errors.

    Note: Avoid frozen dataclasses for exceptions; some frameworks attempt to
    mutate ``__traceback__`` and other attributes during handling, which breaks
    with frozen/slots dataclass exceptions.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "UNKNOWN",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class DiscoveryError(QueueboardError):
    """The store key-space could not be enumerated (503)."""

    def __init__(
        self,
        message: str = "Queue discovery failed",
        *,
        code: str = "DISCOVERY_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, code=code, status_code=503, details=details)


class AdapterConstructionError(QueueboardError):
    """A queue client could not be built for one queue (502)."""

    def __init__(
        self,
        queue_name: str,
        message: str,
        *,
        code: str = "ADAPTER_CONSTRUCTION_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=502,
            details={"queue": queue_name, **(details or {})},
        )
        self.queue_name = queue_name


class ResetBatchError(QueueboardError):
    """The bulk reset could not be attempted at all (500)."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "RESET_BATCH_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, code=code, status_code=500, details=details)
