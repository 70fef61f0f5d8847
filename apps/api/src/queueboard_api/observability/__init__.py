"""Observability module for queueboard API.

This module provides Prometheus metrics and structured logging.
"""

from queueboard_api.observability.logging import bind_queue_context, configure_logging
from queueboard_api.observability.metrics import (
    DISCOVERY_DURATION,
    DISCOVERY_TOTAL,
    HTTP_REQUEST_DURATION,
    HTTP_REQUESTS_TOTAL,
    QUEUE_RESET_TOTAL,
    QUEUES_DISCOVERED,
)
from queueboard_api.observability.middleware import MetricsMiddleware

__all__ = [
    # Logging
    "bind_queue_context",
    "configure_logging",
    # Metrics
    "DISCOVERY_DURATION",
    "DISCOVERY_TOTAL",
    "HTTP_REQUEST_DURATION",
    "HTTP_REQUESTS_TOTAL",
    "QUEUE_RESET_TOTAL",
    "QUEUES_DISCOVERED",
    # Middleware
    "MetricsMiddleware",
]
